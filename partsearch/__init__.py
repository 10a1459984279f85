"""
Parts lookup for the Suzuki Celerio / S-Presso parts desk.

This package normalizes and expands free-text part requests (typos,
darija, positional qualifiers such as "AV G"), scores them against the
bundled per-family catalogs and serves the result through a small API
and a batch CLI. There are no side effects on import: catalogs are read
lazily and cached on first use.
"""
