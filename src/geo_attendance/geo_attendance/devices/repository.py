from __future__ import annotations

from typing import Optional, Protocol, Sequence


class DeviceBindingRepository(Protocol):
    """Device id -> user id relation. A device maps to at most one user."""

    def get_user_for_device(self, device_id: str) -> Optional[str]:
        raise NotImplementedError

    def list_devices_for_user(self, user_id: str) -> Sequence[str]:
        raise NotImplementedError

    def bind_if_absent(self, *, device_id: str, user_id: str) -> str:
        """Atomically bind ``device_id`` to ``user_id`` unless already bound.

        Returns the user the device is bound to after the call, so a caller
        that lost a concurrent race sees the winner's id.
        """

        raise NotImplementedError

    def unbind_device(self, device_id: str) -> bool:
        raise NotImplementedError

    def unbind_user(self, user_id: str) -> int:
        """Drop every binding held by ``user_id``. Returns how many were removed."""

        raise NotImplementedError
