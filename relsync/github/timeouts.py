from __future__ import annotations

# GitHub REST calls (list, create, update, delete)
API_TIMEOUT_SECONDS = 60.0

# Asset uploads stream whole files
UPLOAD_TIMEOUT_SECONDS = 15 * 60.0

# Transient failure retry policy (429, 5xx, network)
RETRY_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 1.0
RETRY_AFTER_CAP_SECONDS = 60.0

# Pagination
PAGE_SIZE = 100
MAX_PAGES = 50
