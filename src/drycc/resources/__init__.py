"""Resource operations built on `Client.request` and `Client.limited_request`.

Errors raised by the client reach the caller untranslated. Listings return a
`drycc.Listing` of (items, count, compatibility).

These helpers are synchronous and reject an `AsyncClient` with `TypeError`;
with an `AsyncClient`, await its `request` and `limited_request` directly.
The websocket helpers (`apps.logs`, `ps.logs`, `ps.exec_command`) accept
either client.
"""

from . import apps, config, limits, ps, volumes

__all__ = ["apps", "config", "limits", "ps", "volumes"]
