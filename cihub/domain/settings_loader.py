import json
from dataclasses import fields
from typing import Optional

from cihub.domain.clientSettings import ClientSettings


def load_settings(path: Optional[str] = None) -> ClientSettings:
    if path is None:
        return ClientSettings()

    with open(path, 'r') as f:
        data = json.load(f)

    known = {f.name for f in fields(ClientSettings)}
    settings = ClientSettings(**{k: v for k, v in data.items() if k in known})
    settings.timeout = float(settings.timeout)
    return settings
