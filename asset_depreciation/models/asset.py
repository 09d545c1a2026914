from dataclasses import dataclass
from typing import Optional

from asset_depreciation.models.financials import AssetFinancials, PriorAccrual


@dataclass(frozen=True)
class AssetRecord:
    """A registered asset as handed to batch runs and reports."""
    item_code: str
    financials: AssetFinancials
    description: str = ""
    category: str = "Uncategorized"
    prior: Optional[PriorAccrual] = None
    units_per_period: Optional[tuple[Optional[int], ...]] = None

    @property
    def is_pre_depreciated(self) -> bool:
        return self.prior is not None
