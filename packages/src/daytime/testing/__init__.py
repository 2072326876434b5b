"""Public test-support utilities for daytime.

Re-exports test doubles and factories so that consumer test suites
can import everything from a single ``daytime.testing`` namespace
instead of reaching into private modules.

Provided symbols:

- :class:`FakeClock` — fixed wall clock for ``Time.now`` and
  ``clock_resolvers``.
- :func:`make_settings` — factory for ``Settings`` without ``.env`` files.
- :func:`fixed_resolvers` — ``H``/``m``/``s`` registry bound to constants.
"""

from daytime.testing._clock import FakeClock
from daytime.testing._resolvers import fixed_resolvers
from daytime.testing._settings import IsolatedSettings, make_settings

__all__ = [
    "FakeClock",
    "IsolatedSettings",
    "fixed_resolvers",
    "make_settings",
]
