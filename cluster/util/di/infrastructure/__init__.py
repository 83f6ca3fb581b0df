"""Infrastructure providers."""

# Import bases
from .email import EmailProvider
from .identity import IdentityProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .email import ProdEmailProvider  # noqa: F401
from .identity import ProdIdentityProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "EmailProvider",
    "IdentityProvider",
    "PersistenceProvider",
    "ProdEmailProvider",
    "ProdIdentityProvider",
    "ProdPersistenceProvider",
]
