"""Central configuration defaults for the message passing decoders."""

from __future__ import annotations

from dataclasses import dataclass

# atanh(+-1) is replaced by +-19.07 so that no infinite message is used.
# Same value as MATLAB's comm.LDPCDecoder.
ATANH_SATURATION = 19.07


@dataclass
class DecoderConfig:
    saturation: float = ATANH_SATURATION
    max_iter: int = 50

    def __post_init__(self):
        if not self.saturation > 0:
            raise ValueError(f"saturation must be positive, got {self.saturation}")
        if self.max_iter < 0:
            raise ValueError(f"max_iter must be non-negative, got {self.max_iter}")


DEFAULTS = DecoderConfig()


def get_config() -> DecoderConfig:
    """Return a copy of the default configuration."""

    return DecoderConfig(**DEFAULTS.__dict__)
