"""
Data models for the ATIS Bot.
All objects are built per command invocation and discarded afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence, Tuple


@dataclass(frozen=True)
class AtisRequest:
    """
    Parameters of one /atis invocation.

    Attributes:
        airport: ICAO code of the airport, uppercased
            Example: "EDDF"
        arr_rwy: Arrival runway, as typed
            Example: "25C"
        dep_rwy: Departure runway, as typed
            Example: "18"
        atis_code: ATIS information letter, uppercased
            Example: "A"
    """
    airport: str
    arr_rwy: str
    dep_rwy: str
    atis_code: str

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "AtisRequest":
        """
        Build a request from positional command arguments.

        Raises:
            ValueError: If fewer than four arguments are given
        """
        if len(args) < 4:
            raise ValueError(f"Expected 4 arguments, got {len(args)}")
        airport, arr_rwy, dep_rwy, atis_code = args[:4]
        return cls(
            airport=airport.upper(),
            arr_rwy=arr_rwy,
            dep_rwy=dep_rwy,
            atis_code=atis_code.upper(),
        )


@dataclass(frozen=True)
class EmbedField:
    """A labelled value shown below the message body."""
    name: str
    value: str
    inline: bool = True


@dataclass(frozen=True)
class DisplayPayload:
    """Rich reply content for a successful ATIS lookup."""
    title: str
    description: str
    footer: str
    timestamp: datetime
    fields: Tuple[EmbedField, ...] = field(default_factory=tuple)
    color: int = 0xFFFFFF
