"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource uses (settings,
logging, per-request DB connections). Resource-specific SQL lives in
`content/`.
"""
