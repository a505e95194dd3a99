"""
Dogma - Innovation effect-execution engine

A deterministic, single-threaded engine for the card game Innovation:
- Card effects that suspend for player decisions and resume with the answer
- Shared and demanded dogma clauses, including nested executions
- Event-driven achievement claims and win detection
- Main/Executing turn state machine with an append-only replay log
"""

__version__ = "0.1.0"
