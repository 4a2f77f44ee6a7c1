"""
Discounting pricer for term deposits.

Values a deposit from the discount curve of its currency and produces
zero-rate point sensitivities of the present value.
"""

from datetime import date

from risk_core.dates import year_fraction
from risk_core.instruments.term_deposit import TermDepositTrade
from risk_core.pricer.provider import RatesProvider
from risk_core.sensitivity.parameter import CurveParameterSensitivities
from risk_core.sensitivity.point import ZeroRateSensitivity
from risk_core.sensitivity.points import MutablePointSensitivities, PointSensitivities


class DiscountingTermDepositPricer:
    """
    Pricer for term deposits using discounting.

    PV for a lender (BUY):
        V = -N × DF(start) + N × (1 + r × tau) × DF(end)

    Cash flows dated before the valuation date are ignored.

    Example
    -------
    >>> pricer = DiscountingTermDepositPricer()
    >>> pv = pricer.present_value(deposit, provider)
    >>> sens = pricer.present_value_sensitivity(deposit, provider)
    """

    def _cash_flows(self, trade: TermDepositTrade, valuation_date: date) -> list[tuple[date, float]]:
        sign = trade.buy_sell.sign
        flows = [
            (trade.start_date, -sign * trade.notional),
            (trade.end_date, sign * (trade.notional + trade.interest)),
        ]
        return [(d, amount) for d, amount in flows if d >= valuation_date]

    def present_value(self, trade: TermDepositTrade, provider: RatesProvider) -> float:
        """Present value in the deposit currency."""
        return sum(
            amount * provider.discount_factor(trade.currency, d)
            for d, amount in self._cash_flows(trade, provider.valuation_date)
        )

    def present_value_sensitivity(
        self, trade: TermDepositTrade, provider: RatesProvider
    ) -> PointSensitivities:
        """
        Zero-rate point sensitivities of the present value.

        Notes
        -----
        dV/dz(t) = -t × amount × DF(t) for each cash flow at time t
        """
        builder = MutablePointSensitivities()
        for d, amount in self._cash_flows(trade, provider.valuation_date):
            t = max(year_fraction(provider.valuation_date, d), 0.0)
            df = provider.discount_factor(trade.currency, d)
            builder.add(ZeroRateSensitivity(trade.currency, d, -t * amount * df))
        return builder.build().normalized()

    def pv_parameter_sensitivity(
        self, trade: TermDepositTrade, provider: RatesProvider
    ) -> CurveParameterSensitivities:
        """Sensitivity of the present value to each discount curve node."""
        point_sensitivity = self.present_value_sensitivity(trade, provider)
        return provider.curve_parameter_sensitivity(point_sensitivity)

    def par_rate(self, trade: TermDepositTrade, provider: RatesProvider) -> float:
        """Deposit rate giving a present value of zero."""
        df_start = provider.discount_factor(trade.currency, trade.start_date)
        df_end = provider.discount_factor(trade.currency, trade.end_date)
        return (df_start / df_end - 1.0) / trade.accrual_factor
