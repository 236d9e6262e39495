"""Request state for the weather widget.

The widget is always in exactly one phase. Each phase is its own frozen model,
so a snapshot, an error message and a loading flag can never be set at once.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from weather_widget.models.weather import WeatherSnapshot


class Idle(BaseModel):
    """No data and no error yet."""

    model_config = ConfigDict(frozen=True)

    phase: Literal["idle"] = "idle"


class Loading(BaseModel):
    """A request is in flight; any previous snapshot or error is gone."""

    model_config = ConfigDict(frozen=True)

    phase: Literal["loading"] = "loading"


class Loaded(BaseModel):
    """The latest request succeeded."""

    model_config = ConfigDict(frozen=True)

    phase: Literal["loaded"] = "loaded"
    snapshot: WeatherSnapshot


class Failed(BaseModel):
    """The latest request failed with a user-facing message."""

    model_config = ConfigDict(frozen=True)

    phase: Literal["failed"] = "failed"
    message: str


RequestState = Annotated[Idle | Loading | Loaded | Failed, Field(discriminator="phase")]

# Outcome of a finished fetch, handed to WeatherStateManager.complete_fetch
FetchResult = WeatherSnapshot | Failed


def settled_state(result: FetchResult) -> Loaded | Failed:
    """The state a finished fetch settles into."""
    return result if isinstance(result, Failed) else Loaded(snapshot=result)
