"""
Telegram ATIS Bot
=================
Generates ATIS broadcasts for an airport from the current VATSIM METAR
and the UniATIS generator, on a single /atis command.
"""

__version__ = "1.0.0"
__author__ = "ATIS Bot"
