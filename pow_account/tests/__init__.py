"""
Test package for pow_account.

- Keeps test logs quiet by default; individual tests raise levels with caplog.
- Registers Hypothesis profiles: "local" (default) and "ci" (more examples).
  Pick one with HYPOTHESIS_PROFILE, or set CI to get "ci".
"""

from __future__ import annotations

import logging
import os

from hypothesis import HealthCheck, settings

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

# the autouse env fixture is function-scoped; it only clears variables
_quiet = [HealthCheck.function_scoped_fixture]
settings.register_profile("local", settings(max_examples=60, deadline=None, suppress_health_check=_quiet))
settings.register_profile("ci", settings(max_examples=200, deadline=None, suppress_health_check=_quiet))
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE") or ("ci" if os.environ.get("CI") else "local"))
