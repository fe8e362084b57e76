"""Registry — the identifier index and per-record persistence.

The registry provides:
- Index: one aggregate list of record ids at a well-known key
- Records: one blob per id at an id-derived key
- Codecs: versioned blob schema and the payload encoding step
"""
