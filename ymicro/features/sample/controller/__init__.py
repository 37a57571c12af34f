from .controller import SampleController
from .dtos import NewGreetingRequest, SampleGreetingRequest, SampleGreetingResponse

__all__ = [
    "SampleController",
    "NewGreetingRequest",
    "SampleGreetingRequest",
    "SampleGreetingResponse",
]
