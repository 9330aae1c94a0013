"""clawpurge - OpenClaw / ClawdBot / MoltBot detection and removal for macOS.

Detects, removes and audits every trace of the product (current and legacy
names) across local user accounts and system-wide locations.
"""

__version__ = "0.1.0"
