"""External integrations: language models, Supabase, auth and logging."""
