# engine/state.py
import logging
from typing import Any, Callable, Dict, List

from .. import config as cfg
from ..data_model import FinancialParameters, default_parameters
from .aggregate import LoanReport, build_report
from .storage import load_params, merge_with_defaults, save_params

logger = logging.getLogger(__name__)

Observer = Callable[[LoanReport], None]


class CalculatorState:
    """Owns the parameter snapshot; every change recomputes, persists, then notifies."""

    def __init__(self, storage_path: str = cfg.STORAGE_PATH, storage_key: str = cfg.STORAGE_KEY):
        self.storage_path = storage_path
        self.storage_key = storage_key
        self.params: FinancialParameters = load_params(storage_path, storage_key)
        self.report: LoanReport = build_report(self.params)
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def update(self, changes: Dict[str, Any]) -> LoanReport:
        """Apply a partial camelCase payload on top of the current parameters."""
        current = self.params.to_dict()
        merged = {**current, **changes}
        merged["expense"] = {**current["expense"], **(changes.get("expense") or {})}
        return self.replace(FinancialParameters.from_dict(merged))

    def replace(self, params: FinancialParameters) -> LoanReport:
        self.params = params
        self.report = build_report(params)
        self._save()
        for observer in list(self._observers):
            observer(self.report)
        return self.report

    def reset(self) -> LoanReport:
        return self.replace(default_parameters())

    def _save(self) -> None:
        if not save_params(self.storage_path, self.storage_key, self.params):
            logger.warning("Parameters not persisted; continuing with in-memory values")


def params_from_payload(payload: Dict[str, Any]) -> FinancialParameters:
    return FinancialParameters.from_dict(merge_with_defaults(payload))
