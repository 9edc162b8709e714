from purchases.services.purchase_workflow import LineRequest, PurchaseWorkflow
from purchases.services.redemption import Redemption, RedemptionVerifier

__all__ = ["LineRequest", "PurchaseWorkflow", "Redemption", "RedemptionVerifier"]
