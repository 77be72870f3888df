from tests.fakes.documents import make_document
from tests.fakes.probe import FakeProbe

__all__ = ["FakeProbe", "make_document"]
