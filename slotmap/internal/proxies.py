from functools import partial

import objproxies

from slotmap.internal.keys import Key


def proxy_for(slot_map, key: Key) -> objproxies.CallbackProxy:
    # We look the value up on every access, so the proxy follows in-place replacements
    # and stops working as soon as the key goes stale.
    return objproxies.CallbackProxy(partial(slot_map.__getitem__, key))
