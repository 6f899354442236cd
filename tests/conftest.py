import asyncio

import pytest

from potsweep.domain import Account, Balance, Pot, State
from potsweep.errors import ClientError

ACCOUNT_ID = "acc_main"


def make_pot(name, balance, goal=0, account_id=ACCOUNT_ID, deleted=False, id=None, currency="GBP"):
    return Pot(
        id=id or f"pot_{name.strip().lower().replace(' ', '_')}",
        name=name,
        account_id=account_id,
        balance=balance,
        currency=currency,
        goal_amount=goal,
        deleted=deleted,
    )


def make_state(balance, pots, account_id=ACCOUNT_ID, accounts=None):
    accounts = accounts or [Account(id=account_id, description="Current account")]
    return State(
        accounts=accounts,
        balances={account_id: Balance(balance=balance)},
        pots={account_id: list(pots)},
    )


class FakeAccountClient:
    """In-memory stand-in for AccountClient that records every call in order."""

    def __init__(self, accounts=None, balances=None, pots=None, fail_on=(), delays=None):
        self._accounts = accounts or [Account(id=ACCOUNT_ID, description="Current account")]
        self._balances = balances or {}
        self._pots = pots or {}
        self.fail_on = set(fail_on)
        self.delays = delays or {}
        self.calls = []

    async def accounts(self):
        self.calls.append(("accounts", None, None, None))
        return list(self._accounts)

    async def balance(self, account_id):
        self.calls.append(("balance", account_id, None, None))
        return Balance(balance=self._balances.get(account_id, 0))

    async def pots(self, account_id):
        self.calls.append(("pots", account_id, None, None))
        return list(self._pots.get(account_id, []))

    async def _transfer(self, kind, pot_id, account_id, amount):
        # yield so concurrently issued calls interleave
        await asyncio.sleep(self.delays.get(pot_id, 0))
        self.calls.append((kind, account_id, pot_id, amount))
        if pot_id in self.fail_on:
            raise ClientError("transfer rejected", pot_id)
        return Pot(id=pot_id, name=pot_id, account_id=account_id, balance=0)

    async def withdraw_from_pot(self, pot_id, account_id, amount):
        return await self._transfer("withdraw", pot_id, account_id, amount)

    async def deposit_into_pot(self, pot_id, account_id, amount):
        return await self._transfer("deposit", pot_id, account_id, amount)

    def transfers(self, kind=None, account_id=None):
        return [
            c
            for c in self.calls
            if c[0] in ("withdraw", "deposit")
            and (kind is None or c[0] == kind)
            and (account_id is None or c[1] == account_id)
        ]


@pytest.fixture
def fake_client():
    return FakeAccountClient()
