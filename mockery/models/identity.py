from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IdentityToken:
    """Opaque key naming one declared function for the lifetime of a mock.

    ``address`` is the ``id()`` of the object anchoring the declaration
    (normally the function's code object). Symbolic keys carry ``address=0``
    and are told apart by ``module`` and ``qualname`` alone.
    """

    module: str
    qualname: str
    address: int = 0

    @property
    def is_symbolic(self) -> bool:
        return self.address == 0

    def __str__(self) -> str:
        if self.module.startswith("<"):
            return self.qualname
        return f"{self.module}.{self.qualname}"


__all__ = ["IdentityToken"]
