"""
Storefront admin API
GraphQL resolvers for admin users, promotions and sales transactions
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
