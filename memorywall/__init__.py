"""
MemoryWall — A Local Document Store for a Campus Community Platform
====================================================================
Exposes the read/write contract of a hosted document database (collections
of JSON-like records, array-union / array-remove updates) while persisting
everything into a local durable key-value table.  On top of it sit a
tag-affinity recommendation engine and a content-moderation workflow.

Package layout::

    memorywall/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Collection keys, channel tags, time helpers
    ├── errors.py          # Error taxonomy
    ├── platform.py        # Async facade (the public operation surface)
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   ├── models.py      # The ``records`` key-value table
    │   ├── store.py       # RecordStore — whole-collection get/set
    │   └── seed.py        # Reference dataset loader
    ├── engine/
    │   ├── affinity.py    # Interest signals + weights
    │   ├── moderation.py  # Post status state machine + denylist screen
    │   └── recommend.py   # Event / skill ranking
    ├── services/
    │   ├── identity_service.py        # Sign-in, registration, session
    │   ├── affinity_service.py        # The affinity ledger
    │   ├── post_service.py            # Posts + moderation actions
    │   ├── channel_service.py         # Chat channels
    │   ├── event_service.py           # Events
    │   ├── recommendation_service.py  # Store-backed recommendations
    │   ├── stats_service.py           # Home page counters
    │   └── polling.py                 # Poll-based change notification
    └── seeds/
        └── reference.yaml
"""

__version__ = "0.1.0"
