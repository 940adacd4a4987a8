"""Two-asset liquidity pool.

Depositors add the base token and receive LP tokens (shares). Holders of the
staked token swap it into the base token at a fixed price, paying a fee that
grows linearly as the base reserve falls below the liquidity target:

    fee = min_fee                                              if after > target
    fee = max_fee - (max_fee - min_fee) * after / target       otherwise

where `after` is the base reserve left if the swap settled with no fee. When
a swap would overdraw the reserve (`after < 0`) the same line is extrapolated,
so the fee can exceed max_fee.

Every mutating operation computes and validates all new balances before
assigning any of them, so a raised error leaves the pool unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NoReturn, TypeVar

import structlog

from lp_pool.config import PoolConfig
from lp_pool.errors import InvalidArgument, InvalidOperation, NegativeValue
from lp_pool.math.fixed_point import Fixed
from lp_pool.models.quantities import (
    LpTokenAmount,
    Percentage,
    Price,
    Quantity,
    StakedTokenAmount,
    TokenAmount,
)
from lp_pool.models.snapshot import PoolSnapshot

logger = structlog.get_logger()

Q = TypeVar("Q", bound=Quantity)


@dataclass(frozen=True)
class SwapQuote:
    """Breakdown of a swap priced against the current pool state.

    value_in and fee_tokens are plain Fixed values: they are never held by the
    pool, so they are not bound to the quantity range.

    Attributes:
        value_in: Staked amount valued in base tokens (staked * price)
        fee: Fee rate applied; above max_fee when the swap overdraws the reserve
        fee_tokens: Base tokens kept by the pool (value_in * fee)
        payout: Base tokens paid to the swapper (value_in - fee_tokens)
    """

    value_in: Fixed
    fee: Fixed
    fee_tokens: Fixed
    payout: TokenAmount


def _expect(value: object, cls: type[Q], name: str) -> Q:
    """Check that value carries the expected unit."""
    if not isinstance(value, cls):
        raise TypeError(f"{name} must be {cls.__name__}, got {type(value).__name__}")
    return value


@dataclass
class LpPool:
    """Liquidity pool for a base token and a staked token.

    Use LpPool.init() (or from_config()) to create a pool; balances start at
    zero. The price and fee parameters never change after creation.
    """

    price: Price
    min_fee: Percentage
    max_fee: Percentage
    liquidity_target: TokenAmount
    token_amount: TokenAmount = field(default_factory=TokenAmount.zero)
    st_token_amount: StakedTokenAmount = field(default_factory=StakedTokenAmount.zero)
    lp_token_amount: LpTokenAmount = field(default_factory=LpTokenAmount.zero)

    def __post_init__(self) -> None:
        _expect(self.price, Price, "price")
        _expect(self.min_fee, Percentage, "min_fee")
        _expect(self.max_fee, Percentage, "max_fee")
        _expect(self.liquidity_target, TokenAmount, "liquidity_target")

        if self.min_fee > self.max_fee:
            self._reject_init("min_fee is bigger than max_fee")
        if self.liquidity_target.is_zero():
            self._reject_init("liquidity_target can not be zero")
        if self.price.is_zero():
            self._reject_init("price can not be zero")

    def _reject_init(self, reason: str) -> NoReturn:
        logger.warning(
            "pool_init_rejected",
            reason=reason,
            price=str(self.price),
            min_fee=str(self.min_fee),
            max_fee=str(self.max_fee),
            liquidity_target=str(self.liquidity_target),
        )
        raise InvalidArgument(reason)

    @classmethod
    def init(
        cls,
        price: Price,
        min_fee: Percentage,
        max_fee: Percentage,
        liquidity_target: TokenAmount,
    ) -> LpPool:
        """Create an empty pool.

        Args:
            price: Base tokens per staked token
            min_fee: Swap fee while the base reserve stays above the target
            max_fee: Swap fee when the base reserve would reach zero
            liquidity_target: Base reserve at which the fee bottoms out

        Returns:
            Pool with zero reserves and zero shares

        Raises:
            InvalidArgument: If min_fee > max_fee, liquidity_target == 0 or price == 0
        """
        pool = cls(
            price=price,
            min_fee=min_fee,
            max_fee=max_fee,
            liquidity_target=liquidity_target,
        )
        logger.debug(
            "pool_initialized",
            price=str(price),
            min_fee=str(min_fee),
            max_fee=str(max_fee),
            liquidity_target=str(liquidity_target),
        )
        return pool

    @classmethod
    def from_config(cls, config: PoolConfig) -> LpPool:
        """Create an empty pool from a PoolConfig."""
        return cls.init(*config.to_pool_params())

    # --- Liquidity ---

    def add_liquidity(self, amount: TokenAmount) -> LpTokenAmount:
        """Deposit base tokens and mint shares.

        While the staked reserve is zero, shares are minted 1:1 and the base
        reserve and share supply are set to `amount` (not accumulated).
        Otherwise shares are priced against the total pool value:

            shares = amount * lp_token_amount / (token_amount + st_token_amount * price)

        Args:
            amount: Base tokens deposited

        Returns:
            Shares minted

        Raises:
            NegativeValue: If the computed share amount is negative
        """
        _expect(amount, TokenAmount, "amount")

        if self.st_token_amount.is_zero():
            shares_issued = LpTokenAmount(amount.fixed)
            logger.debug(
                "pool_add_liquidity",
                amount=str(amount),
                shares=str(shares_issued),
                replaced_token_amount=str(self.token_amount),
                replaced_lp_token_amount=str(self.lp_token_amount),
            )
            self.token_amount = amount
            self.lp_token_amount = shares_issued
            return shares_issued

        total_value = self.token_amount.fixed + self.st_token_amount.fixed * self.price.fixed
        shares = amount.fixed * self.lp_token_amount.fixed / total_value

        if shares < Fixed.ZERO:
            logger.warning(
                "pool_add_liquidity_negative_shares",
                amount=str(amount),
                shares=str(shares),
            )
            raise NegativeValue(f"shares issued is negative: {shares}")

        shares_issued = LpTokenAmount(shares)
        new_token_amount = self.token_amount + amount
        new_lp_token_amount = self.lp_token_amount + shares_issued

        self.token_amount = new_token_amount
        self.lp_token_amount = new_lp_token_amount

        logger.debug(
            "pool_add_liquidity",
            amount=str(amount),
            shares=str(shares_issued),
            total_value=str(total_value),
        )
        return shares_issued

    def preview_remove_liquidity(
        self, shares: LpTokenAmount
    ) -> tuple[TokenAmount, StakedTokenAmount]:
        """Compute what redeeming `shares` would pay out, without changing the pool.

        Each asset is paid out as reserve * (shares / lp_token_amount), with
        both the proportion and each product truncated.

        Raises:
            InvalidOperation: If shares exceed the outstanding supply
            NegativeValue: If a computed payout is negative
        """
        _expect(shares, LpTokenAmount, "shares")

        if shares > self.lp_token_amount:
            logger.warning(
                "pool_remove_liquidity_rejected",
                shares=str(shares),
                lp_token_amount=str(self.lp_token_amount),
            )
            raise InvalidOperation(
                f"tried to remove {shares} shares but only {self.lp_token_amount} exist"
            )

        if shares.is_zero():
            return TokenAmount.zero(), StakedTokenAmount.zero()

        proportion = shares.fixed / self.lp_token_amount.fixed
        tokens = self.token_amount.fixed * proportion
        st_tokens = self.st_token_amount.fixed * proportion

        if tokens < Fixed.ZERO or st_tokens < Fixed.ZERO:
            logger.warning(
                "pool_remove_liquidity_negative_payout",
                shares=str(shares),
                tokens=str(tokens),
                st_tokens=str(st_tokens),
            )
            if tokens < Fixed.ZERO:
                raise NegativeValue(f"token payout is negative: {tokens}")
            raise NegativeValue(f"staked token payout is negative: {st_tokens}")

        return TokenAmount(tokens), StakedTokenAmount(st_tokens)

    def remove_liquidity(self, shares: LpTokenAmount) -> tuple[TokenAmount, StakedTokenAmount]:
        """Redeem shares for a proportional part of both reserves.

        The payouts are debited from the reserves and the shares are burned.

        Args:
            shares: Shares to redeem

        Returns:
            (base tokens paid out, staked tokens paid out)

        Raises:
            InvalidOperation: If shares exceed the outstanding supply
            NegativeValue: If a computed payout is negative
        """
        tokens, st_tokens = self.preview_remove_liquidity(shares)

        new_token_amount = self.token_amount - tokens
        new_st_token_amount = self.st_token_amount - st_tokens
        new_lp_token_amount = self.lp_token_amount - shares

        self.token_amount = new_token_amount
        self.st_token_amount = new_st_token_amount
        self.lp_token_amount = new_lp_token_amount

        logger.debug(
            "pool_remove_liquidity",
            shares=str(shares),
            tokens=str(tokens),
            st_tokens=str(st_tokens),
        )
        return tokens, st_tokens

    # --- Swaps ---

    def swap_fee(self, amount_after: Fixed) -> Fixed:
        """Fee rate for a swap leaving `amount_after` base tokens at zero fee."""
        if amount_after > self.liquidity_target.fixed:
            return self.min_fee.fixed

        max_fee = self.max_fee.fixed
        min_fee = self.min_fee.fixed
        return max_fee - (max_fee - min_fee) * amount_after / self.liquidity_target.fixed

    def quote_swap(self, staked_amount: StakedTokenAmount) -> SwapQuote:
        """Price a swap of staked tokens without changing the pool.

        Raises:
            NegativeValue: If the payout is negative
            InvalidOperation: If the payout exceeds the base reserve
        """
        _expect(staked_amount, StakedTokenAmount, "staked_amount")

        value_in = staked_amount.fixed * self.price.fixed
        amount_after = self.token_amount.fixed - value_in
        fee = self.swap_fee(amount_after)
        fee_tokens = value_in * fee
        payout = value_in - fee_tokens

        if payout < Fixed.ZERO:
            logger.warning(
                "pool_swap_negative_payout",
                staked_amount=str(staked_amount),
                fee=str(fee),
                payout=str(payout),
            )
            raise NegativeValue(f"swap payout is negative: {payout}")

        if payout > self.token_amount.fixed:
            logger.warning(
                "pool_swap_rejected",
                staked_amount=str(staked_amount),
                payout=str(payout),
                token_amount=str(self.token_amount),
            )
            raise InvalidOperation(
                f"tried to swap for {payout} tokens but the pool holds {self.token_amount}"
            )

        return SwapQuote(
            value_in=value_in,
            fee=fee,
            fee_tokens=fee_tokens,
            payout=TokenAmount(payout),
        )

    def swap(self, staked_amount: StakedTokenAmount) -> TokenAmount:
        """Swap staked tokens into base tokens.

        The staked tokens join the staked reserve and the payout leaves the
        base reserve.

        Args:
            staked_amount: Staked tokens deposited by the swapper

        Returns:
            Base tokens paid out, net of the fee

        Raises:
            NegativeValue: If the payout is negative
            InvalidOperation: If the payout exceeds the base reserve
        """
        quote = self.quote_swap(staked_amount)

        new_st_token_amount = self.st_token_amount + staked_amount
        new_token_amount = self.token_amount - quote.payout

        self.st_token_amount = new_st_token_amount
        self.token_amount = new_token_amount

        logger.debug(
            "pool_swap",
            staked_amount=str(staked_amount),
            fee=str(quote.fee),
            fee_tokens=str(quote.fee_tokens),
            payout=str(quote.payout),
        )
        return quote.payout

    # --- Reporting ---

    def snapshot(self) -> PoolSnapshot:
        """Current balances and parameters as a serializable model."""
        return PoolSnapshot(
            price=str(self.price),
            token_amount=str(self.token_amount),
            st_token_amount=str(self.st_token_amount),
            lp_token_amount=str(self.lp_token_amount),
            liquidity_target=str(self.liquidity_target),
            min_fee=str(self.min_fee),
            max_fee=str(self.max_fee),
        )
