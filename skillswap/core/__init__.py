"""Domain logic with no I/O: errors, scoring, state machines, realtime coordination."""
