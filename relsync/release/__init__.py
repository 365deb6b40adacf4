"""Release bounded context.

Cross-layer types shared by input resolution, the GitHub adapter and the
reconciliation stages:
- errors: the canonical failure payload
- contracts: the resolved run input and the run report
"""

from __future__ import annotations
