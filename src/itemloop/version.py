"""Package version.

Bump rules:
- Patch (0.1.x): bug fixes, wording tweaks
- Minor (0.x.0): new commands or settings
- Major (x.0.0): changes to the command dialogue
"""

VERSION = "0.1.0"
