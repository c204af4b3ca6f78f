"""
tally — order totals for e-commerce.

    from tally import engine as E      # Order total engine
    from tally import discount as D    # Discount rules
    from tally import tax as TX        # Tax rates and tax lines
    from tally import catalog as CT    # Price lookups
    from tally import lines as LN      # Line items
    from tally import money as M       # Exact money
"""

from tally import money
from tally import lines
from tally import catalog
from tally import discount
from tally import tax
from tally import engine
from tally._errors import PricingError, PricingErrorKind
from tally._types import (
    Result,
    Ok,
    Error,
    Option,
    Some,
    Nothing,
    Lazy,
    ProductRef,
    CustomerRef,
)

__version__ = "0.1.0"

__all__ = (
    "money",
    "lines",
    "catalog",
    "discount",
    "tax",
    "engine",
    "PricingError",
    "PricingErrorKind",
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    "Lazy",
    "ProductRef",
    "CustomerRef",
)
