"""
Pydantic configuration models for the curve risk core.

These models provide validation and type-safe configuration for:
- Curve nodes (FX swap, FRA, term deposit)
- Curves and curve groups
- Historical scenario generation
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from risk_core.dates import Tenor
from risk_core.instruments.base import CurrencyPair
from risk_core.market.curve import (
    DiscountCurveId,
    IborIndex,
    RateCurveId,
    RateIndexCurveId,
)
from risk_core.nodes.base import CurveNode
from risk_core.nodes.definition import CurveDefinition
from risk_core.nodes.fra import FraCurveNode
from risk_core.nodes.fx_swap import FxSwapCurveNode
from risk_core.nodes.term_deposit import TermDepositCurveNode
from risk_core.scenarios.historical import AlignmentPolicy
from risk_core.scenarios.shifts import ShiftType


def _validate_tenor(v: str) -> str:
    Tenor.parse(v)
    return v.strip().upper()


class FxSwapNodeConfig(BaseModel):
    """
    FX swap curve node.

    Attributes
    ----------
    currency_pair : str
        Currency pair such as 'EUR/USD'
    period_to_far : str
        Tenor from spot to the far date
    period_to_near : str
        Tenor from spot to the near date
    spot_days : int
        Business days from trade date to spot
    fx_near_key : str
        Identifier of the near FX rate quote
    fx_points_key : str
        Identifier of the forward points quote

    Example
    -------
    >>> FxSwapNodeConfig(currency_pair="EUR/USD", period_to_far="3M",
    ...                  fx_near_key="EUR/USD", fx_points_key="EUR/USD-3M-FXP")
    """

    type: Literal["fx_swap"] = "fx_swap"
    currency_pair: str
    period_to_far: str
    period_to_near: str = "0D"
    spot_days: int = Field(ge=0, le=5, default=2)
    fx_near_key: str = Field(min_length=1)
    fx_points_key: str = Field(min_length=1)

    @field_validator("currency_pair")
    @classmethod
    def pair_valid(cls, v: str) -> str:
        """Validate the currency pair format."""
        return str(CurrencyPair.parse(v))

    @field_validator("period_to_far", "period_to_near")
    @classmethod
    def tenor_valid(cls, v: str) -> str:
        """Validate tenor fields."""
        return _validate_tenor(v)

    def to_node(self) -> FxSwapCurveNode:
        return FxSwapCurveNode.from_config(self)


class FraNodeConfig(BaseModel):
    """
    FRA curve node. The FRA ends one index tenor after it starts.

    Attributes
    ----------
    period_to_start : str
        Tenor from spot to the FRA start date
    rate_key : str
        Identifier of the FRA rate quote
    spread : float
        Spread added to the quoted rate
    """

    type: Literal["fra"] = "fra"
    period_to_start: str
    rate_key: str = Field(min_length=1)
    spread: float = Field(ge=-0.05, le=0.05, default=0.0)

    @field_validator("period_to_start")
    @classmethod
    def tenor_valid(cls, v: str) -> str:
        """Validate tenor fields."""
        return _validate_tenor(v)

    def to_node(self, index: IborIndex) -> FraCurveNode:
        return FraCurveNode.from_config(self, index)


class TermDepositNodeConfig(BaseModel):
    """
    Term deposit curve node.

    Attributes
    ----------
    deposit_period : str
        Tenor of the deposit
    spot_days : int
        Business days from trade date to the deposit start
    rate_key : str
        Identifier of the deposit rate quote
    spread : float
        Spread added to the quoted rate
    """

    type: Literal["term_deposit"] = "term_deposit"
    deposit_period: str
    spot_days: int = Field(ge=0, le=5, default=2)
    rate_key: str = Field(min_length=1)
    spread: float = Field(ge=-0.05, le=0.05, default=0.0)

    @field_validator("deposit_period")
    @classmethod
    def tenor_valid(cls, v: str) -> str:
        """Validate tenor fields."""
        return _validate_tenor(v)

    def to_node(self, currency: str) -> TermDepositCurveNode:
        return TermDepositCurveNode.from_config(self, currency)


NodeConfig = Annotated[
    FxSwapNodeConfig | FraNodeConfig | TermDepositNodeConfig,
    Field(discriminator="type"),
]


class CurveConfig(BaseModel):
    """
    A curve and its calibration nodes.

    Attributes
    ----------
    name : str
        Name of the curve, as used in historical data files
    kind : str
        'discount' for a currency discount curve, 'forward' for an index curve
    currency : str
        Currency of the curve
    index : str | None
        Rate index name, required for forward curves
    index_tenor : str | None
        Tenor of the rate index, required for forward curves
    nodes : list[NodeConfig]
        Nodes in curve order
    """

    name: str = Field(min_length=1)
    kind: Literal["discount", "forward"] = "discount"
    currency: str = Field(min_length=3, max_length=3)
    index: str | None = None
    index_tenor: str | None = None
    nodes: list[NodeConfig] = Field(min_length=1)

    @field_validator("currency")
    @classmethod
    def currency_upper(cls, v: str) -> str:
        return v.upper()

    @field_validator("index_tenor")
    @classmethod
    def tenor_valid(cls, v: str | None) -> str | None:
        """Validate the index tenor."""
        return None if v is None else _validate_tenor(v)

    @model_validator(mode="after")
    def kind_requirements(self) -> "CurveConfig":
        """Validate fields required by the curve kind."""
        if self.kind == "forward":
            if not self.index or not self.index_tenor:
                raise ValueError(f"Forward curve {self.name} requires index and index_tenor")
        elif any(isinstance(node, FraNodeConfig) for node in self.nodes):
            raise ValueError(f"Discount curve {self.name} cannot contain FRA nodes")
        return self

    @property
    def ibor_index(self) -> IborIndex | None:
        """Rate index of a forward curve."""
        if self.kind != "forward":
            return None
        return IborIndex(self.index, self.currency, Tenor.parse(self.index_tenor))  # type: ignore[arg-type]

    def curve_id(self, group: str) -> RateCurveId:
        """Identifier of the curve within a group."""
        if self.kind == "forward":
            return RateIndexCurveId(self.index, group)  # type: ignore[arg-type]
        return DiscountCurveId(self.currency, group)

    def to_nodes(self) -> list[CurveNode]:
        """Build the curve nodes."""
        nodes: list[CurveNode] = []
        for node in self.nodes:
            if isinstance(node, FraNodeConfig):
                nodes.append(node.to_node(self.ibor_index))  # type: ignore[arg-type]
            elif isinstance(node, TermDepositNodeConfig):
                nodes.append(node.to_node(self.currency))
            else:
                nodes.append(node.to_node())
        return nodes


class CurveGroupConfig(BaseModel):
    """
    A named group of curves calibrated together.

    Attributes
    ----------
    name : str
        Group name
    curves : list[CurveConfig]
        Curves of the group, with unique names
    """

    name: str = Field(min_length=1, default="Default")
    curves: list[CurveConfig] = Field(min_length=1)

    @model_validator(mode="after")
    def unique_curves(self) -> "CurveGroupConfig":
        """Validate curve names and identifiers are unique."""
        names = [c.name for c in self.curves]
        if len(set(names)) != len(names):
            raise ValueError(f"Curve names must be unique, got {names}")
        ids = [c.curve_id(self.name) for c in self.curves]
        if len(set(ids)) != len(ids):
            raise ValueError("Two curves of the group resolve to the same curve identifier")
        return self

    def curve(self, name: str) -> CurveConfig:
        """Get a curve configuration by name."""
        for curve in self.curves:
            if curve.name == name:
                return curve
        raise KeyError(f"Curve {name!r} not found in group {self.name}")

    def curve_id(self, name: str) -> RateCurveId:
        """Identifier of a named curve."""
        return self.curve(name).curve_id(self.name)

    def curve_definitions(self) -> list[CurveDefinition]:
        """Curve definitions of all curves in the group."""
        return [
            CurveDefinition(curve.curve_id(self.name), tuple(curve.to_nodes()))
            for curve in self.curves
        ]

    @property
    def n_curves(self) -> int:
        return len(self.curves)


class HistoricalScenarioConfig(BaseModel):
    """
    Historical scenario generation parameters.

    Attributes
    ----------
    shift_type : str
        'absolute' or 'relative'
    alignment : str
        Node matching policy: 'position', 'strict' or 'identifier'
    curves : list[str]
        Names of the curves to shift
    var_confidence : float
        Confidence level of the reported VaR
    max_workers : int | None
        Worker threads for concurrent replay, None for serial
    """

    shift_type: Literal["absolute", "relative"] = "absolute"
    alignment: Literal["position", "strict", "identifier"] = "position"
    curves: list[str] = Field(min_length=1)
    var_confidence: float = Field(gt=0.5, lt=1.0, default=0.99)
    max_workers: int | None = Field(ge=1, le=64, default=None)

    @property
    def shift_type_enum(self) -> ShiftType:
        return ShiftType(self.shift_type)

    @property
    def alignment_policy(self) -> AlignmentPolicy:
        return AlignmentPolicy(self.alignment)
