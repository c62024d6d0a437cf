"""Services Layer — imperative shell around the pure core.

Invariants:
    - One service per record type, constructed by the composition root
    - Services raise TaskTrackError subclasses; routes never catch them
"""
