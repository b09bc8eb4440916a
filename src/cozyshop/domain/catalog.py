"""Read-only product catalog capability."""
from __future__ import annotations

from typing import List, Protocol

from cozyshop.domain.defs import ProductTemplateDef


class ProductCatalog(Protocol):
    def get_template(self, template_id: str) -> ProductTemplateDef | None: ...

    def ids(self) -> List[str]: ...
