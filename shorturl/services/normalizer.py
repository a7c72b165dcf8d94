"""Hostname extraction for URL validation.

The hostname produced here is only ever fed to the DNS check; records are
always stored under the URL exactly as it was submitted.
"""

import re

SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

# A delimiter only ends the hostname once at least one character precedes it
AFTER_HOST_PATTERN = re.compile(r"(?<=.)[/:?#].*", re.DOTALL)


def strip_scheme(url: str) -> str:
    """Remove a leading ``http://`` or ``https://``.

    >>> strip_scheme("https://www.freecodecamp.org/learn")
    'www.freecodecamp.org/learn'
    """
    return SCHEME_PATTERN.sub("", str(url), count=1)


def normalize_url(url: str) -> str:
    """Reduce a URL to its bare hostname.

    Drops the scheme, then the port, path, query string and fragment.
    A ``www.`` subdomain is kept. Malformed input never raises, it just
    yields whatever is left after the substitutions.

    >>> normalize_url("https://www.freecodecamp.org:443/learn?x=1#top")
    'www.freecodecamp.org'
    """
    return AFTER_HOST_PATTERN.sub("", strip_scheme(url), count=1)
