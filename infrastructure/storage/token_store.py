from typing import Callable, Optional

TOKEN_KEY = "token"

# (key, old_value, new_value); new_value is None on removal
StoreListener = Callable[[str, Optional[str], Optional[str]], None]


class KeyValueStore:
    """Observable string key/value store holding the credential."""

    def __init__(self):
        self._listeners: list[StoreListener] = []

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, value: Optional[str]) -> None:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        old = self.get(key)
        self._write(key, value)
        if old != value:
            self._notify(key, old, value)

    def remove(self, key: str) -> None:
        old = self.get(key)
        self._write(key, None)
        if old is not None:
            self._notify(key, old, None)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: str, old: Optional[str], new: Optional[str]) -> None:
        for listener in list(self._listeners):
            listener(key, old, new)


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[dict] = None):
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, value: Optional[str]) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value
