"""
In-memory state for the stub backend.

Holds users, wallets, exchanges, savings plans, top-ups and storage charges.
All mutation goes through StubStore methods, which hold a lock because the
API suite fans requests out across threads.
"""
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

# Reference prices in USD per unit
USD_PRICES = {
    'XAU': 2350.0,
    'XAG': 29.5,
    'XPT': 980.0,
    'USD': 1.0,
    'SGD': 0.74,
}
ASSETS = list(USD_PRICES)
METAL_ASSETS = ['XAU', 'XAG', 'XPT']
PRICE_DATE = '2024-06-28'

# Account the suites log in with in IN_MEMORY mode
SEED_USER = {'email': 'user1@test.com', 'password': '123456789'}


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def exchange_rate(from_asset: str, to_asset: str) -> float:
    return round(USD_PRICES[from_asset] / USD_PRICES[to_asset], 8)


class StubStore:
    """Mutable backend state, seeded with two customers."""

    def __init__(self):
        self.lock = threading.RLock()
        self.users: Dict[int, Dict[str, Any]] = {}
        self.wallets: Dict[int, Dict[str, Any]] = {}
        self.exchanges: Dict[int, Dict[str, Any]] = {}
        self.plans: Dict[int, Dict[str, Any]] = {}
        self.topups: Dict[str, Dict[str, Any]] = {}
        self.storage_charges: List[Dict[str, Any]] = []
        self.reset_tokens: Dict[str, Tuple[str, str]] = {}
        self._next_ids = {'user': 1, 'wallet': 1, 'exchange': 1, 'plan': 1, 'charge': 1}
        self._seed()

    def _next_id(self, kind: str) -> int:
        value = self._next_ids[kind]
        self._next_ids[kind] += 1
        return value

    def _seed(self):
        first = self.add_user(SEED_USER['email'], SEED_USER['password'], 'Test User', '+6591234567')
        second = self.add_user('user2@test.com', '987654321', 'Other User', '+6598765432')

        usd = self.add_wallet(first['id'], 'USD', 'Main USD Wallet', is_safe=False, is_default=True)
        usd['balance'] = 10000.0
        gold = self.add_wallet(first['id'], 'XAU', 'Gold Vault', is_safe=True)
        gold['balance'] = 2.5
        self.add_wallet(second['id'], 'SGD', 'SGD Wallet', is_default=True)

        self.add_storage_charge(gold, 'fiat_deduction', charge_amount=12.5, metal_sold=0.0)
        self.add_storage_charge(gold, 'metal_sale', charge_amount=7.25, metal_sold=0.0031)

    def add_user(self, email: str, password: str, name: str, phone_number: str) -> Dict[str, Any]:
        with self.lock:
            now = utc_now()
            user = {
                'id': self._next_id('user'),
                'email': email,
                'password': password,
                'name': name,
                'phone_number': phone_number,
                'avatar': None,
                'created_at': now,
                'updated_at': now,
            }
            self.users[user['id']] = user
            return user

    def find_user_by_email(self, email: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(email, str):
            return None
        for user in self.users.values():
            if user['email'].lower() == email.lower():
                return user
        return None

    def add_wallet(self, customer_id: int, asset: str, name: str,
                   is_safe: bool = False, is_default: bool = False) -> Dict[str, Any]:
        with self.lock:
            now = utc_now()
            wallet = {
                'id': self._next_id('wallet'),
                'customer_id': customer_id,
                'asset': asset,
                'name': name,
                'balance': 0,
                'is_default_wallet': is_default,
                'is_safe': is_safe,
                'created_at': now,
                'updated_at': now,
            }
            self.wallets[wallet['id']] = wallet
            return wallet

    def wallets_for(self, customer_id: int) -> List[Dict[str, Any]]:
        return [w for w in self.wallets.values() if w['customer_id'] == customer_id]

    def owned_wallet(self, customer_id: int, wallet_id: Any) -> Optional[Dict[str, Any]]:
        wallet = self.wallets.get(wallet_id) if isinstance(wallet_id, int) else None
        if wallet is None or wallet['customer_id'] != customer_id:
            return None
        return wallet

    def add_storage_charge(self, wallet: Dict[str, Any], charge_type: str,
                           charge_amount: float, metal_sold: float) -> Dict[str, Any]:
        with self.lock:
            now = utc_now()
            owner = self.users[wallet['customer_id']]
            charge = {
                'id': self._next_id('charge'),
                'charge_amount': charge_amount,
                'created_at': now,
                'updated_at': now,
                'processing_date': now,
                'storage_charge_type': charge_type,
                'metal_sold': metal_sold,
                'price_currency': 'USD',
                'price_used': USD_PRICES[wallet['asset']],
                'wallet_id': wallet['id'],
                'wallet_asset': wallet['asset'],
                'wallet_balance': wallet['balance'],
                'wallet_customer_id': owner['id'],
                'wallet_user_name': owner['name'],
            }
            self.storage_charges.append(charge)
            return charge

    def add_exchange(self, customer_id: int, source: Dict[str, Any], target: Dict[str, Any],
                     from_amount: float, description: Optional[str]) -> Dict[str, Any]:
        with self.lock:
            rate = exchange_rate(source['asset'], target['asset'])
            to_amount = round(from_amount * rate, 8)
            source['balance'] = round(source['balance'] - from_amount, 8)
            target['balance'] = round(target['balance'] + to_amount, 8)
            now = utc_now()
            exchange_id = self._next_id('exchange')
            exchange = {
                'id': exchange_id,
                'customer_id': customer_id,
                'exchange_number': f"EX-{exchange_id:06d}",
                'status': 'completed',
                'from_amount': from_amount,
                'from_asset': source['asset'],
                'from_wallet_id': source['id'],
                'to_amount': to_amount,
                'to_asset': target['asset'],
                'to_wallet_id': target['id'],
                'exchange_rate': rate,
                'description': description,
                'created_at': now,
                'updated_at': now,
            }
            self.exchanges[exchange_id] = exchange
            return exchange

    def add_plan(self, customer_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        with self.lock:
            now = utc_now()
            plan = {
                'id': self._next_id('plan'),
                'customer_id': customer_id,
                'source_wallet_id': payload['source_wallet_id'],
                'target_value': payload['target_value'],
                'start_date': payload['start_date'],
                'end_date': payload['end_date'],
                'status': 'active',
                'savings_goal_type': payload['savings_goal_type'],
                'frequency': payload['frequency'],
                'remaining_frequency': payload['frequency'],
                'description': payload.get('description'),
                'allocations': payload.get('allocations', []),
                'created_at': now,
                'updated_at': now,
            }
            self.plans[plan['id']] = plan
            return plan

    def add_topup(self, customer_id: int, wallet: Dict[str, Any], amount: float) -> Dict[str, Any]:
        with self.lock:
            reference = f"TOP-{uuid.uuid4().hex[:12].upper()}"
            topup = {
                'reference': reference,
                'customer_id': customer_id,
                'wallet_id': wallet['id'],
                'amount': amount,
                'status': 'pending',
                'created_at': utc_now(),
            }
            self.topups[reference] = topup
            return topup

    def issue_reset_token(self, kind: str, subject: str) -> str:
        """Issue a single-use token for a 'password' or 'pin' reset."""
        with self.lock:
            token = uuid.uuid4().hex
            self.reset_tokens[token] = (kind, subject)
            return token

    def consume_reset_token(self, token: Any, kind: str) -> Optional[str]:
        """Return the token's subject and retire it, or None if it is unknown or of another kind."""
        with self.lock:
            entry = self.reset_tokens.get(token) if isinstance(token, str) else None
            if entry is None or entry[0] != kind:
                return None
            del self.reset_tokens[token]
            return entry[1]
