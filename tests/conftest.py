"""Global test fixtures."""

import logfire

# Keep spans local; this must happen before any test opens a span
logfire.configure(send_to_logfire=False, console=False)
