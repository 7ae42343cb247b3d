"""HTTP surface: routers, request models, responses, cross-origin headers."""
