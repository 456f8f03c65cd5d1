"""
Service layer.

Entity services wrap the remote record store; ``TimeTrackingService``
keeps per‑task timer state in this process; ``DashboardService``
aggregates summary statistics from the four entity collections.
"""
