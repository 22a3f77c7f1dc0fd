"""remotecli -- Remote execution of administrative console commands.

This package exposes a single privileged operation over HTTP: running a
console command on behalf of an authenticated manager. Every request goes
through the same gatekeeping pipeline (authenticate, authorize, validate)
before it reaches the console.
"""

__version__ = "0.1.0"
