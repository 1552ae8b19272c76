"""Message arrays shared by the check and bit updates."""

from dataclasses import dataclass

import numpy as np


@dataclass
class MessageStore:
    """
    Attributes:
        channel (np.ndarray): Channel LLR per bit.
        bit (np.ndarray): Current total LLR per bit.
        check (np.ndarray): Product of incoming tanh(msg / 2) per check.
        bit2check (np.ndarray): Bit-to-check messages per edge, tanh(msg / 2).
        check2bit (np.ndarray): Check-to-bit messages per edge, LLR.
    """

    channel: np.ndarray
    bit: np.ndarray
    check: np.ndarray
    bit2check: np.ndarray
    check2bit: np.ndarray

    @classmethod
    def allocate(cls, n_bit, n_check, n_edge):
        return cls(
            channel=np.zeros(n_bit),
            bit=np.zeros(n_bit),
            check=np.zeros(n_check),
            bit2check=np.zeros(n_edge),
            check2bit=np.zeros(n_edge),
        )

    def load_channel(self, llr):
        """Set the channel messages and use them as initial bit messages."""
        self.channel[:] = llr
        self.bit[:] = self.channel

    def clear_check2bit(self):
        # must not leak from a previous decode
        self.check2bit.fill(0.0)
