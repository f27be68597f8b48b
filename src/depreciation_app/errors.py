from __future__ import annotations


class RegisterError(Exception):
    """Base class for asset register lookups that cannot be satisfied."""


class AssetNotFound(RegisterError):
    def __init__(self, asset_id: str) -> None:
        super().__init__(f"Asset {asset_id} not found")
        self.asset_id = asset_id


class UnknownCategory(RegisterError):
    def __init__(self, law: str, name: str) -> None:
        super().__init__(f"Unknown {law} category: {name}")
        self.law = law
        self.name = name
