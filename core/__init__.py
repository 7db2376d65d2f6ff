# =============================================================================
# core/ - Directory Core
# =============================================================================
# - models/: Pydantic schemas (tools, categories, favorites, outcomes)
# - requests.py: Typed requests and their translation into remote queries
# - services/: Catalog reads, admin writes, favorites
# - listing.py: Infinite-scroll page state machine
# - directory.py: Home feed (filtering, counts, favorites, search bar)
# =============================================================================
