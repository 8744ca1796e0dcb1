from dataclasses import dataclass, field
from typing import Any, Dict, Optional

DEFAULT_ENTRANCE = "main.html"
DEFAULT_SUB_ENTRANCE = "secondary.html"

@dataclass
class LauncherConfig:
    interface: bool = True
    address: str = ""
    entrance: str = DEFAULT_ENTRANCE
    sub_entrance: str = DEFAULT_SUB_ENTRANCE   # "" = single display only

    def has_sub_entrance(self) -> bool:
        return bool(self.sub_entrance and self.sub_entrance.strip())

    def to_dict(self) -> Dict[str, Any]:
        # key order is the on-disk order
        return {
            "interface": self.interface,
            "address": self.address,
            "entrance": self.entrance,
            "subEntrance": self.sub_entrance,
        }

# JSON key -> (attribute, expected type)
CONFIG_FIELDS = {
    "interface": ("interface", bool),
    "address": ("address", str),
    "entrance": ("entrance", str),
    "subEntrance": ("sub_entrance", str),
}

@dataclass
class Display:
    id: int
    x: int
    y: int
    width: int
    height: int
    native: Any = field(default=None, repr=False, compare=False)   # webview Screen

@dataclass
class WindowSpec:
    role: str                       # "kiosk" | "control"
    title: str
    display: Display
    path: Optional[str] = None      # kiosk: local entry file
    html: Optional[str] = None      # control: inline page

@dataclass
class StoredFile:
    name: str
    size: int
    created: str
    modified: str
    is_image: bool

    def to_dict(self, with_kind: bool = False) -> Dict[str, Any]:
        d = {"name": self.name, "size": self.size,
             "created": self.created, "modified": self.modified}
        if with_kind:
            d["isImage"] = self.is_image
        return d
