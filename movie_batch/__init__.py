"""
Movie batch tools: a year-range date filter over a movie dataset CSV, and an
enricher that resolves titles through OMDb and YouTube into an append-mode CSV.

Entrypoints (CLI scripts) live in `scripts/` and import from `movie_batch`
rather than the other way around.
"""
