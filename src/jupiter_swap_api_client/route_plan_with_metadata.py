"""Route plan: the ordered hops a quote takes through trading venues.

Each hop carries a fixed set of trade fields plus whatever venue-specific
attributes the service attaches. Unknown attributes are captured as model
extras so they survive a decode/encode round trip.
"""

from typing import Any, Iterator, Optional

from pydantic import ConfigDict, RootModel

from jupiter_swap_api_client.serde_helpers import JupiterModel, PubkeyStr, U64Str


class SwapInfo(JupiterModel):
    """Trade details of a single hop."""

    model_config = ConfigDict(extra="allow")

    amm_key: PubkeyStr
    label: str
    input_mint: PubkeyStr
    output_mint: PubkeyStr
    in_amount: U64Str
    out_amount: U64Str
    fee_amount: Optional[U64Str] = None
    fee_mint: Optional[PubkeyStr] = None

    @property
    def venue_metadata(self) -> dict[str, Any]:
        """Venue-specific attributes not modelled by name, in wire order."""
        return dict(self.model_extra or {})


class RoutePlanStep(JupiterModel):
    """One hop of a route plan."""

    model_config = ConfigDict(extra="allow")

    swap_info: SwapInfo
    percent: int
    bps: Optional[int] = None

    @property
    def extra_attributes(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class RoutePlanWithMetadata(RootModel[tuple[RoutePlanStep, ...]]):
    """Hops in execution order, exactly as the service returned them.

    Iterating is restartable; the sequence is never sorted or deduplicated.
    """

    model_config = ConfigDict(frozen=True)

    def __iter__(self) -> Iterator[RoutePlanStep]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> RoutePlanStep:
        return self.root[index]

    @property
    def labels(self) -> list[str]:
        """Venue label of every hop, in order."""
        return [step.swap_info.label for step in self.root]
