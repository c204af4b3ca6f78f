"""
Core types for tally.

Re-exports from kungfu + package-wide aliases.
"""

from __future__ import annotations

from collections.abc import Hashable

# Re-export from kungfu
from kungfu import Result, Ok, Error, Option, Some, Nothing, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Aliases
# ═══════════════════════════════════════════════════════════════════════════════

type ProductRef = Hashable
"""Opaque product/variant handle owned by the catalog collaborator."""

type CustomerRef = Hashable
"""Opaque customer handle; None stands for an anonymous shopper."""

type Lazy[T, E] = LazyCoroResult[T, E]
"""Lazy async computation that may fail."""

# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    "LazyCoroResult",
    # Aliases
    "ProductRef",
    "CustomerRef",
    "Lazy",
)
