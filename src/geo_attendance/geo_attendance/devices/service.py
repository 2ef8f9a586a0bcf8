from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .repository import DeviceBindingRepository

logger = logging.getLogger(__name__)


class DeviceAdminService:
    """Explicit re-provisioning of device bindings by an administrator.

    The implicit first-use binding happens in ``authorize_device``; everything
    that changes an existing binding goes through here.
    """

    def __init__(self, bindings: DeviceBindingRepository):
        self._bindings = bindings

    def devices_for(self, user_id: str) -> list[str]:
        return list(self._bindings.list_devices_for_user(user_id))

    def clear_user_devices(self, *, current_role: Role, user_id: str) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can reset devices")

        removed = self._bindings.unbind_user(require_non_empty(user_id, "User"))
        logger.info("Cleared %d device binding(s) for user %s", removed, user_id)
        return removed

    def provision(self, *, current_role: Role, user_id: str, device_id: str, force: bool = False) -> None:
        """Bind ``device_id`` to ``user_id``.

        Without ``force`` a device already held by another user is refused;
        with it the old binding is dropped first.
        """

        if current_role != Role.ADMIN:
            raise AuthorizationError("Only administrators can provision devices")

        user_id = require_non_empty(user_id, "User")
        device_id = require_non_empty(device_id, "Device")

        owner = self._bindings.get_user_for_device(device_id)
        if owner is not None and owner != user_id:
            if not force:
                raise ValidationError("Device is registered to another employee")
            self._bindings.unbind_device(device_id)
            logger.info("Device %s released from user %s", device_id, owner)

        owner = self._bindings.bind_if_absent(device_id=device_id, user_id=user_id)
        if owner != user_id:
            raise ValidationError("Device was claimed by another employee concurrently")
        logger.info("Device %s provisioned for user %s", device_id, user_id)
