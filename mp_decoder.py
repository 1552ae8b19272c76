import logging
from abc import ABC, abstractmethod

import numpy as np

from mp_config import get_config
from mp_messages import MessageStore
from tanner_graph import TannerGraph

logger = logging.getLogger(__name__)


def saturating_atanh(x, saturation):
    """atanh with +-saturation in place of +-inf at and beyond +-1."""
    x = np.asarray(x, dtype=float)
    out = np.where(x <= -1.0, -saturation, saturation)
    inside = np.abs(x) < 1.0
    out[inside] = np.arctanh(x[inside])
    return out


class AbstractMPDecoder(ABC):
    """Abstract base class for sum-product message passing decoders.

    Subclasses provide the check and bit updates; the decode loop, hard
    decision and parity test live here.
    """

    def __init__(self, n_bit, n_check, n_edge, idx_linear, config=None):
        """
        Args:
            n_bit (int): Number of bit nodes (columns of the parity-check matrix).
            n_check (int): Number of check nodes (rows of the parity-check matrix).
            n_edge (int): Number of edges (ones in the parity-check matrix).
            idx_linear (array_like): Edge linear indices, n_check * bit + check.
            config (DecoderConfig): Saturation and default iteration budget.
        """
        self.graph = TannerGraph(n_bit, n_check, n_edge, idx_linear)
        self.config = config if config is not None else get_config()
        self.messages = MessageStore.allocate(
            self.graph.n_bit, self.graph.n_check, self.graph.n_edge
        )
        self.converged = False

    @classmethod
    def from_parity_check(cls, H, config=None):
        """
        Args:
            H (np.ndarray or sparse matrix): Parity-check matrix (n_check x n_bit).
        """
        graph = TannerGraph.from_parity_check(H)
        return cls(
            graph.n_bit, graph.n_check, graph.n_edge, graph.linear_indices(), config
        )

    @property
    def posterior_llr(self):
        return self.messages.bit.copy()

    @abstractmethod
    def update_check(self):
        """Compute bit-to-check messages and check messages (tanh domain)."""

    @abstractmethod
    def update_bit(self):
        """Compute check-to-bit messages and total bit LLRs."""

    def hard_decision(self):
        # LLR = ln(p(0) / p(1)); exactly 0 decides 0
        return (self.messages.bit < 0).astype(int)

    def is_valid(self, codeword):
        return not np.any(self.graph.syndrome(codeword))

    def decode(self, channel_llr, max_iter=None):
        """
        Run flooding sum-product decoding.

        Args:
            channel_llr (array_like): Received LLRs ln(p(rx|0) / p(rx|1)), length n_bit.
            max_iter (int): Maximum iterations, config.max_iter if None.

        Returns:
            tuple: (codeword: np.ndarray, iterations: int). iterations equals
            max_iter when no valid codeword was reached.
        """
        llr = np.asarray(channel_llr, dtype=float)
        if llr.shape != (self.graph.n_bit,):
            raise ValueError(
                f"llr length mismatch: expected {self.graph.n_bit}, got shape {llr.shape}"
            )
        if max_iter is None:
            max_iter = self.config.max_iter
        if max_iter < 0:
            raise ValueError(f"max_iter must be non-negative, got {max_iter}")

        self.messages.load_channel(llr)
        c_hat = self.hard_decision()
        if self.is_valid(c_hat):
            self.converged = True
            logger.debug("Channel hard decision is a codeword")
            return c_hat, 0

        self.messages.clear_check2bit()

        for it in range(1, max_iter + 1):
            self.update_check()
            self.update_bit()

            c_hat = self.hard_decision()
            if self.is_valid(c_hat):
                self.converged = True
                logger.debug("Converged after %d iterations", it)
                return c_hat, it

        self.converged = False
        logger.debug("No valid codeword after %d iterations", max_iter)
        return c_hat, max_iter
