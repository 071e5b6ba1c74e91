"""
Analytics App

Lightweight visit analytics kept in the key-value store:
- raw events under analytics:event:<id>
- per-day page and action counters
- a capped newest-first list of recent events
- a summary for the admin page and an admin-only reset
"""
