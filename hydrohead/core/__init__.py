"""Core calculation modules for hydrohead.

This package contains the hydronic engine:
- system: System / Section / Fitting data model
- fluids: Water and glycol property tables
- pipes: Pipe geometry catalog
- fittings: Fitting, valve and device resistance catalog
- hydraulics: Per-section velocity, friction and head loss
- diagnostics: Design checks and warnings
- pump_head: System aggregation and pump duty point
- sizing: Flow and pipe sizing helpers
- config: Design limits and JSON I/O
"""
