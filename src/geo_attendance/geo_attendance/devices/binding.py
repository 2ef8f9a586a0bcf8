"""One-device-per-employee policy.

First use wins: the first check-in with a device binds it to the user, later
check-ins must present the same device. A device already bound to someone
else is refused. Re-running with the same device after a downstream failure
is allowed again, so retries are safe.

The "no device yet" check and the bind are separate store calls. The bind is
followed by a re-read of the user's devices, and a request that finds a
second device backs its own binding out. Concurrent first check-ins from two
devices therefore end with at most one binding (possibly none, in which case
a retry binds cleanly).
"""

from __future__ import annotations

from typing import Optional

from ..core.exceptions import DeviceConflict
from .model import DeviceDecision
from .repository import DeviceBindingRepository


def authorize_device(user_id: str, device_id: Optional[str], bindings: DeviceBindingRepository) -> DeviceDecision:
    if not device_id:
        return DeviceDecision(skipped=True)

    owner = bindings.get_user_for_device(device_id)
    if owner is not None and owner != user_id:
        raise DeviceConflict(DeviceConflict.REGISTERED_TO_OTHER, device_id=device_id)

    known = bindings.list_devices_for_user(user_id)
    if not known:
        owner = bindings.bind_if_absent(device_id=device_id, user_id=user_id)
        if owner != user_id:
            raise DeviceConflict(DeviceConflict.REGISTERED_TO_OTHER, device_id=device_id)

        # Lost a first-use race against another device of the same user.
        if any(d != device_id for d in bindings.list_devices_for_user(user_id)):
            bindings.unbind_device(device_id)
            raise DeviceConflict(DeviceConflict.UNRECOGNIZED, device_id=device_id)
        return DeviceDecision(newly_bound=True)

    if device_id not in known:
        raise DeviceConflict(DeviceConflict.UNRECOGNIZED, device_id=device_id)
    return DeviceDecision()
