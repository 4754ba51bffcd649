"""
External system integrations (OMDb, YouTube).

New external metadata clients should live under this namespace so they remain
decoupled from the pipeline scripts in `scripts/`.
"""
