from typing import Any, List, Protocol, runtime_checkable


@runtime_checkable
class PostStore(Protocol):
    """
    Capability shared by both post backends.
    Identity differs per backend (filename ref vs numeric id) and is not reconciled.
    """

    def list(self) -> List[Any]: ...

    def read(self, ref: Any) -> Any: ...

    def create(self, draft: Any) -> Any: ...

    def update(self, ref: Any, draft: Any) -> Any: ...

    def delete(self, ref: Any) -> None: ...
