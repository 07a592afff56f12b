"""
In-memory stub of the fintech backend.

Reproduces the observable contract the API suite asserts against (paths,
status codes, body shapes, bearer-token auth) so the suite and the client can
run without the real server. Used by the IN_MEMORY api mode through FastAPI's
TestClient.
"""

import html
import logging
import math
import secrets
import time
from datetime import date
from typing import Any, Dict, Optional

import jwt
from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..helpers.validation import ValidationHelpers
from .store import ASSETS, METAL_ASSETS, PRICE_DATE, USD_PRICES, StubStore, exchange_rate, utc_now

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = 'HS256'
TOKEN_TTL_SECONDS = 3600
OTP_TTL_SECONDS = 300
MAX_NAME_LENGTH = 255


class StubError(Exception):
    """Rendered as ``{"status": ..., "error": {"error_message": ...}}``."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _is_positive_number(value: Any) -> bool:
    return ValidationHelpers.validate_amount(value)


def _require(payload: Dict[str, Any], *names: str) -> None:
    missing = [name for name in names if payload.get(name) in (None, '')]
    if missing:
        raise StubError(400, f"Missing required fields: {', '.join(missing)}")


def _require_strings(payload: Dict[str, Any], *names: str) -> None:
    _require(payload, *names)
    wrong = [name for name in names if not isinstance(payload[name], str)]
    if wrong:
        raise StubError(400, f"Fields must be strings: {', '.join(wrong)}")


def _parse_date(value: Any, field_name: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise StubError(400, f"{field_name} must be an ISO date (YYYY-MM-DD)")


def _public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in user.items() if key != 'password'}


class StubBackend:
    """FastAPI application mimicking the fintech backend under test."""

    def __init__(self, store: Optional[StubStore] = None, secret_key: Optional[str] = None):
        self.store = store or StubStore()
        self._secret_key = secret_key or secrets.token_hex(32)
        self._security = HTTPBearer(auto_error=False)
        self.app = FastAPI(
            title="Fintech Backend Stub",
            description="In-memory stand-in for API contract tests",
            version="1.0.0"
        )
        self._setup_error_handlers()
        self._setup_auth_routes()
        self._setup_wallet_routes()
        self._setup_savings_routes()
        self._setup_exchange_routes()
        self._setup_topup_routes()
        self._setup_account_routes()

    def issue_token(self, user: Dict[str, Any], ttl: int = TOKEN_TTL_SECONDS) -> str:
        now = int(time.time())
        claims = {
            'sub': str(user['id']),
            'email': user['email'],
            'iat': now,
            'exp': now + ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=TOKEN_ALGORITHM)

    def _current_user(self, credentials: Optional[HTTPAuthorizationCredentials]) -> Dict[str, Any]:
        if credentials is None:
            raise StubError(401, "Authentication required")
        try:
            claims = jwt.decode(credentials.credentials, self._secret_key, algorithms=[TOKEN_ALGORITHM])
        except jwt.InvalidTokenError as e:
            raise StubError(401, f"Invalid token: {e}")

        user = self.store.users.get(int(claims['sub']))
        if user is None:
            raise StubError(401, "Unknown user")
        return user

    def _setup_error_handlers(self):
        @self.app.exception_handler(StubError)
        async def stub_error_handler(request: Request, exc: StubError):
            logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
            return JSONResponse(
                status_code=exc.status_code,
                content={'status': exc.status_code, 'error': {'error_message': exc.message}},
            )

        @self.app.exception_handler(RequestValidationError)
        async def validation_error_handler(request: Request, exc: RequestValidationError):
            return JSONResponse(
                status_code=400,
                content={'status': 400, 'error': {'error_message': 'Invalid request body'}},
            )

    def _setup_auth_routes(self):
        app = self.app
        store = self.store

        def current_user(credentials: HTTPAuthorizationCredentials = Depends(self._security)):
            return self._current_user(credentials)

        # Shared with the other route groups
        self.current_user = current_user

        @app.post('/api/auth/login')
        def login(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'email', 'password')
            user = store.find_user_by_email(payload['email'])
            if user is None or user['password'] != payload['password']:
                raise StubError(401, "Invalid email or password")
            return {
                'access_token': self.issue_token(user),
                'refresh_token': secrets.token_urlsafe(32),
                'token_type': 'Bearer',
                'expire_in': TOKEN_TTL_SECONDS,
            }

        @app.post('/api/signup')
        def signup(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'email', 'password', 'name', 'phone_number')
            if not ValidationHelpers.validate_email(payload['email']):
                raise StubError(400, "Invalid email format")
            if not ValidationHelpers.validate_password(payload['password']):
                raise StubError(400, "Password must be at least 8 characters")
            if not ValidationHelpers.validate_phone_number(payload['phone_number']):
                raise StubError(400, "Invalid phone number")
            if store.find_user_by_email(payload['email']) is not None:
                raise StubError(409, "Email already registered")
            user = store.add_user(payload['email'], payload['password'], payload['name'], payload['phone_number'])
            return {'message': 'Signup successful', 'user_id': user['id']}

        @app.post('/api/auth/forgot-password')
        def forgot_password(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'email')
            user = store.find_user_by_email(payload['email'])
            if user is None:
                raise StubError(400, "No account for this email")
            store.issue_reset_token('password', user['email'])
            return {'message': 'Password reset email sent'}

        @app.post('/api/auth/reset-password')
        def reset_password(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'new_password', 'token')
            if not ValidationHelpers.validate_password(payload['new_password']):
                raise StubError(400, "Password must be at least 8 characters")
            user = store.find_user_by_email(store.consume_reset_token(payload['token'], 'password'))
            if user is None:
                raise StubError(400, "Invalid or expired reset token")
            user['password'] = payload['new_password']
            return {'message': 'Password updated'}

        @app.post('/api/auth/send-phone-otp')
        def send_phone_otp(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'phone_number', 'pin_code')
            if not ValidationHelpers.validate_phone_number(payload['phone_number']):
                raise StubError(400, "Invalid phone number")
            return {'session_token': secrets.token_urlsafe(24), 'expire_in': OTP_TTL_SECONDS}

        @app.post('/api/auth/resend-otp')
        def resend_otp(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'phone_number')
            if not ValidationHelpers.validate_phone_number(payload['phone_number']):
                raise StubError(400, "Invalid phone number")
            return {'message': 'OTP resent'}

        @app.post('/api/auth/forgot-pin')
        def forgot_pin(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'phone_number')
            if not ValidationHelpers.validate_phone_number(payload['phone_number']):
                raise StubError(400, "Invalid phone number")
            store.issue_reset_token('pin', payload['phone_number'])
            return {'message': 'PIN reset SMS sent'}

        @app.post('/api/auth/reset-pin')
        def reset_pin(payload: Optional[Dict[str, Any]] = Body(default=None)):
            payload = payload or {}
            _require_strings(payload, 'new_pin', 'token')
            if store.consume_reset_token(payload['token'], 'pin') is None:
                raise StubError(400, "Invalid or expired reset token")
            return {'message': 'PIN updated'}

    def _setup_wallet_routes(self):
        app = self.app
        store = self.store
        current_user = self.current_user

        @app.get('/api/wallets')
        def get_wallets(user: dict = Depends(current_user)):
            return {'wallets': store.wallets_for(user['id'])}

        @app.post('/api/wallets', status_code=201)
        def create_wallet(payload: Optional[Dict[str, Any]] = Body(default=None),
                          user: dict = Depends(current_user)):
            payload = payload or {}
            _require(payload, 'asset', 'name')
            if payload['asset'] not in ASSETS:
                raise StubError(400, f"Unsupported asset: {payload['asset']}")
            wallet = store.add_wallet(user['id'], payload['asset'], payload['name'],
                                      is_safe=bool(payload.get('is_safe', False)))
            return {'message': 'Wallet created', 'wallet': wallet}

        @app.post('/api/wallets/deposit')
        def deposit(payload: Optional[Dict[str, Any]] = Body(default=None),
                    user: dict = Depends(current_user)):
            payload = payload or {}
            _require(payload, 'amount', 'asset')
            if not _is_positive_number(payload['amount']):
                raise StubError(400, "Amount must be a positive number")
            if payload['asset'] not in ASSETS:
                raise StubError(400, f"Unsupported asset: {payload['asset']}")
            wallets = [w for w in store.wallets_for(user['id']) if w['asset'] == payload['asset']]
            if not wallets:
                raise StubError(400, f"No {payload['asset']} wallet to deposit into")
            with store.lock:
                wallet = wallets[0]
                wallet['balance'] = round(wallet['balance'] + payload['amount'], 8)
            return {'message': 'Deposit successful', 'wallet': wallet}

        @app.delete('/api/wallets/{wallet_id}')
        def delete_wallet(wallet_id: int, user: dict = Depends(current_user)):
            with store.lock:
                if store.owned_wallet(user['id'], wallet_id) is None:
                    raise StubError(404, "Wallet not found")
                del store.wallets[wallet_id]
            return {'message': 'Wallet deleted'}

    def _setup_savings_routes(self):
        app = self.app
        store = self.store
        current_user = self.current_user

        def owned_plan(user, plan_id: int) -> Dict[str, Any]:
            plan = store.plans.get(plan_id)
            if plan is None or plan['customer_id'] != user['id']:
                raise StubError(404, "Savings plan not found")
            return plan

        @app.get('/api/savings/plans')
        def get_plans(user: dict = Depends(current_user)):
            return {'plans': [p for p in store.plans.values() if p['customer_id'] == user['id']]}

        @app.post('/api/savings/plans')
        def create_plan(payload: Optional[Dict[str, Any]] = Body(default=None),
                        user: dict = Depends(current_user)):
            payload = payload or {}
            _require(payload, 'savings_goal_type', 'source_wallet_id', 'target_value',
                     'start_date', 'end_date', 'frequency')
            if payload['savings_goal_type'] not in ('plan', 'goal'):
                raise StubError(400, "savings_goal_type must be 'plan' or 'goal'")
            if store.owned_wallet(user['id'], payload['source_wallet_id']) is None:
                raise StubError(400, "Invalid source wallet")
            if not _is_positive_number(payload['target_value']):
                raise StubError(400, "target_value must be a positive number")
            start = _parse_date(payload['start_date'], 'start_date')
            end = _parse_date(payload['end_date'], 'end_date')
            if start >= end:
                raise StubError(400, "start_date must be before end_date")
            plan = store.add_plan(user['id'], payload)
            return {'message': 'Savings plan created', 'plan_id': plan['id']}

        @app.get('/api/savings/plans-table', response_class=HTMLResponse)
        def get_plans_table(status: Optional[str] = None, page: int = Query(1, ge=1),
                            limit: int = Query(20, ge=1), user: dict = Depends(current_user)):
            plans = [p for p in store.plans.values() if p['customer_id'] == user['id']]
            if status:
                plans = [p for p in plans if p['status'] == status]
            offset = (page - 1) * limit
            rows = ''.join(
                f"<tr><td>{p['id']}</td><td>{html.escape(p['description'] or '')}</td>"
                f"<td>{p['status']}</td><td>{p['target_value']}</td></tr>"
                for p in plans[offset:offset + limit]
            )
            return (
                '<table class="savings-plans"><thead><tr><th>ID</th><th>Description</th>'
                f'<th>Status</th><th>Target</th></tr></thead><tbody>{rows}</tbody></table>'
            )

        @app.get('/api/savings/plans/{plan_id}')
        def get_plan(plan_id: int, user: dict = Depends(current_user)):
            return {'plan': owned_plan(user, plan_id)}

        @app.get('/api/savings/plans/{plan_id}/details-fragment', response_class=HTMLResponse)
        def get_plan_fragment(plan_id: int, user: dict = Depends(current_user)):
            plan = owned_plan(user, plan_id)
            return (
                f'<div class="plan-details" data-plan-id="{plan["id"]}">'
                f'<h3>{html.escape(plan["description"] or "Savings plan")}</h3>'
                f'<p>Status: {plan["status"]}</p>'
                f'<p>Remaining installments: {plan["remaining_frequency"]}</p></div>'
            )

        @app.get('/api/savings/prices')
        def get_prices(user: dict = Depends(current_user)):
            prices = {
                asset: {
                    currency: {
                        'price': round(USD_PRICES[asset] / USD_PRICES[currency], 4),
                        'currency': currency,
                        'date': PRICE_DATE,
                    }
                    for currency in ('USD', 'SGD')
                }
                for asset in METAL_ASSETS
            }
            return {'prices': prices}

    def _setup_exchange_routes(self):
        app = self.app
        store = self.store
        current_user = self.current_user

        @app.get('/api/exchanges')
        def get_exchanges(limit: Optional[int] = Query(None, ge=0), user: dict = Depends(current_user)):
            exchanges = [e for e in store.exchanges.values() if e['customer_id'] == user['id']]
            exchanges.sort(key=lambda e: e['id'], reverse=True)
            return exchanges[:limit] if limit is not None else exchanges

        @app.post('/api/exchanges')
        def create_exchange(payload: Optional[Dict[str, Any]] = Body(default=None),
                            user: dict = Depends(current_user)):
            payload = payload or {}
            _require(payload, 'from_amount', 'from_asset', 'from_wallet_id', 'to_asset', 'to_wallet_id')
            if not _is_positive_number(payload['from_amount']):
                raise StubError(400, "from_amount must be a positive number")
            with store.lock:
                source = store.owned_wallet(user['id'], payload['from_wallet_id'])
                target = store.owned_wallet(user['id'], payload['to_wallet_id'])
                if source is None or target is None:
                    raise StubError(400, "Invalid wallet")
                if source['asset'] != payload['from_asset'] or target['asset'] != payload['to_asset']:
                    raise StubError(400, "Wallet asset does not match exchange asset")
                if source['balance'] < payload['from_amount']:
                    raise StubError(400, "Insufficient balance")
                exchange = store.add_exchange(user['id'], source, target,
                                              payload['from_amount'], payload.get('description'))
            return {
                'exchange_id': exchange['id'],
                'exchange_number': exchange['exchange_number'],
                'exchange_rate': exchange['exchange_rate'],
                'from_amount': exchange['from_amount'],
                'to_amount': exchange['to_amount'],
                'status': exchange['status'],
                'message': 'Exchange completed',
            }

        @app.get('/api/exchanges/pairs')
        def get_pairs():
            return {asset: [other for other in ASSETS if other != asset] for asset in ASSETS}

        @app.get('/api/exchanges/rates')
        def get_rates():
            return {
                asset: {other: exchange_rate(asset, other) for other in ASSETS if other != asset}
                for asset in ASSETS
            }

        @app.get('/api/exchanges/quote')
        def get_quote(from_asset: Optional[str] = None, to_asset: Optional[str] = None,
                      from_amount: Optional[str] = None, user: dict = Depends(current_user)):
            if from_asset not in ASSETS or to_asset not in ASSETS or from_asset == to_asset:
                raise StubError(400, "Unsupported asset pair")
            try:
                amount = float(from_amount)
            except (TypeError, ValueError):
                raise StubError(400, "from_amount must be a number")
            if not math.isfinite(amount) or amount <= 0:
                raise StubError(400, "from_amount must be a positive number")
            rate = exchange_rate(from_asset, to_asset)
            return {
                'from_asset': from_asset,
                'to_asset': to_asset,
                'from_amount': amount,
                'to_amount': round(amount * rate, 8),
                'exchange_rate': rate,
            }

        @app.get('/api/exchanges/{exchange_id}')
        def get_exchange(exchange_id: int, user: dict = Depends(current_user)):
            exchange = store.exchanges.get(exchange_id)
            if exchange is None or exchange['customer_id'] != user['id']:
                raise StubError(404, "Exchange not found")
            return exchange

    def _setup_topup_routes(self):
        app = self.app
        store = self.store
        current_user = self.current_user

        @app.post('/api/topups')
        def create_topup(payload: Optional[Dict[str, Any]] = Body(default=None),
                         user: dict = Depends(current_user)):
            payload = payload or {}
            _require(payload, 'amount', 'wallet_id')
            if not _is_positive_number(payload['amount']):
                raise StubError(400, "Amount must be a positive number")
            wallet = store.owned_wallet(user['id'], payload['wallet_id'])
            if wallet is None:
                raise StubError(400, "Invalid wallet")
            topup = store.add_topup(user['id'], wallet, payload['amount'])
            return {'reference': topup['reference'], 'message': 'Topup request created'}

        # path converter so an empty reference reaches the handler
        @app.post('/api/topups/{reference:path}/confirm')
        def confirm_topup(reference: str, user: dict = Depends(current_user)):
            if not reference:
                raise StubError(400, "Reference is required")
            with store.lock:
                topup = store.topups.get(reference)
                if topup is None or topup['customer_id'] != user['id']:
                    raise StubError(404, "Topup not found")
                if topup['status'] != 'pending':
                    raise StubError(400, "Topup already confirmed")
                topup['status'] = 'confirmed'
                wallet = store.wallets.get(topup['wallet_id'])
                if wallet is not None:
                    wallet['balance'] = round(wallet['balance'] + topup['amount'], 8)
            return {'message': 'Topup confirmed successfully', 'reference': reference}

    def _setup_account_routes(self):
        app = self.app
        store = self.store
        current_user = self.current_user

        @app.get('/api/storage-charges')
        def get_storage_charges(user: dict = Depends(current_user)):
            items = [c for c in store.storage_charges if c['wallet_customer_id'] == user['id']]
            return {'items': items, 'total': len(items)}

        @app.get('/api/storage-charges/summary')
        def get_storage_summary(user: dict = Depends(current_user)):
            items = [c for c in store.storage_charges if c['wallet_customer_id'] == user['id']]
            fiat = round(sum(c['charge_amount'] for c in items if c['storage_charge_type'] == 'fiat_deduction'), 2)
            metal = round(sum(c['charge_amount'] for c in items if c['storage_charge_type'] == 'metal_sale'), 2)
            return {
                'total_amount': round(fiat + metal, 2),
                'total_charges': len(items),
                'fiat_deduction_total': fiat,
                'metal_sale_total': metal,
                'recent_charges': items[-5:],
            }

        @app.get('/api/me/profile')
        def get_profile(user: dict = Depends(current_user)):
            return _public_user(user)

        @app.put('/api/me/update')
        def update_profile(payload: Optional[Dict[str, Any]] = Body(default=None),
                           user: dict = Depends(current_user)):
            payload = payload or {}
            if 'name' in payload:
                name = payload['name']
                if not isinstance(name, str) or not name.strip():
                    raise StubError(400, "Name must not be empty")
                if len(name) > MAX_NAME_LENGTH:
                    raise StubError(400, f"Name must be at most {MAX_NAME_LENGTH} characters")
            with store.lock:
                for key in ('name', 'avatar'):
                    if key in payload:
                        user[key] = payload[key]
                user['updated_at'] = utc_now()
            return _public_user(user)

        @app.get('/api/customers')
        def get_customers(user: dict = Depends(current_user)):
            return [
                {'id': u['id'], 'name': u['name'], 'email': u['email']}
                for u in store.users.values()
            ]

        @app.get('/api/holidays')
        def get_holidays():
            return [
                {'date': '2024-01-01', 'name': "New Year's Day", 'type': 'public'},
                {'date': '2024-08-09', 'name': 'National Day', 'type': 'public'},
                {'date': '2024-12-25', 'name': 'Christmas Day', 'type': 'public'},
            ]


def create_app(store: Optional[StubStore] = None) -> FastAPI:
    """Build a fresh stub application."""
    return StubBackend(store).app
