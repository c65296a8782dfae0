"""Runtime configuration update use case."""

from __future__ import annotations

from ..config.manager import ConfigManager
from ..exceptions import BrandGuardianError, ConfigurationError
from ..logging import get_logger
from .models import ConfigUpdateRequest, ConfigUpdateResult

logger = get_logger(__name__)

_LIST_FIELDS = ("categories", "sensitive_keywords", "allowed_topics", "blocked_topics")


class UpdateConfigUseCase:
    """Validate and apply safety configuration and compliance weight updates.

    Either every requested change is applied or none is: the weights are
    validated before the safety update is committed, and the safety update
    itself is validated in full by the config manager.
    """

    def __init__(self, config_manager: ConfigManager):
        self.config_manager = config_manager

    async def execute(self, request: ConfigUpdateRequest) -> ConfigUpdateResult:
        safety_updates = request.safety_updates()
        weight_updates = request.weight_updates()
        if not safety_updates and not weight_updates:
            return ConfigUpdateResult(success=False, message="No configuration changes provided")

        try:
            for name in _LIST_FIELDS:
                values = safety_updates.get(name)
                if values is not None and any(not v or not v.strip() for v in values):
                    raise ConfigurationError(
                        f"{name.replace('_', ' ').capitalize()} cannot be empty",
                        config_key=f"safety.{name}",
                    )
            if weight_updates:
                # raises before anything is committed
                self.config_manager.compliance_weights.updated(**weight_updates)
            if safety_updates:
                self.config_manager.update_safety_config(safety_updates)
            if weight_updates:
                self.config_manager.update_compliance_weights(**weight_updates)
        except BrandGuardianError as exc:
            logger.warning("config_update_rejected", error=exc.message)
            return ConfigUpdateResult(success=False, message=exc.message)

        updated = sorted(safety_updates) + [f"{name}_weight" for name in sorted(weight_updates)]
        logger.info("config_updated", fields=updated)
        return ConfigUpdateResult(
            success=True,
            message="Configuration updated successfully",
            updated_fields=updated,
        )


__all__ = ["UpdateConfigUseCase"]
