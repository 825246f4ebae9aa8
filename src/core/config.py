"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandConfig:
    """Chat command settings."""

    prefix: str = "!wordle"


@dataclass(frozen=True)
class ReplyConfig:
    """What the processor asks the transport to send back."""

    enabled: bool = True  # per-result reply text; reactions are sent regardless
    announce_on_complete: bool = True
    solved_reaction: str = "🎉"
    failed_reaction: str = "😢"
