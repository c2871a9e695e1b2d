#!/usr/bin/env python3
"""
Web interface for the Multi-Signature Wallet

Mutating wallet calls must be signed: X-Caller-Pubkey carries the caller's
compressed public key and X-Caller-Signature an ECDSA signature over
"<request path>\\n<raw body>".
"""

import hashlib
import logging
import threading

from flask import Flask, request, jsonify

from multisig_wallet.config import WalletConfig
from multisig_wallet.custody import BlockClock, CustodyAccount
from multisig_wallet.errors import Result, TransferError, WalletError
from multisig_wallet.identity import normalize_identity, verify_caller
from multisig_wallet.wallet import MultiSigWallet

logger = logging.getLogger(__name__)

app = Flask(__name__)
config = WalletConfig.from_env()

# In-process registry; state lives only as long as the process
wallets = {}
registry_lock = threading.Lock()


def wallet_id_for(owners) -> str:
    """Deterministic wallet ID from the owner set"""
    hasher = hashlib.sha256()
    hasher.update(b"MULTISIG_WALLET_V1")

    for owner in sorted(owners):
        hasher.update(owner.encode())

    return hasher.hexdigest()


def signed_message(path: str, body: bytes) -> bytes:
    return path.encode() + b"\n" + body


def _int_field(data, name, default=None):
    """Integer JSON field; floats, strings and booleans are rejected"""
    value = data.get(name, default) if default is not None else data[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def _authenticated_caller():
    pubkey = request.headers.get('X-Caller-Pubkey', '')
    signature = request.headers.get('X-Caller-Signature', '')
    if not pubkey or not signature:
        return None
    return verify_caller(signed_message(request.path, request.get_data()), signature, pubkey)


def _failure(result):
    return jsonify({
        'success': False,
        'error': result.error.name,
        'code': result.error.code
    }), 400


def _unauthenticated():
    return jsonify({'success': False, 'error': 'Caller signature missing or invalid'}), 401


def _not_found():
    return jsonify({'success': False, 'error': 'Wallet not found'}), 404


@app.route('/api/wallets', methods=['POST'])
def create_wallet():
    """Create and initialize a new wallet"""
    data = request.get_json(silent=True) or {}

    try:
        owners = [normalize_identity(owner) for owner in data['owners']]
        threshold = data['threshold']
        start_height = _int_field(data, 'start_height', config.start_height)
        balance = _int_field(data, 'balance', config.custody_balance)
        wallet = MultiSigWallet(BlockClock(start_height), CustodyAccount(balance), config)
        wallet_id = wallet_id_for(owners)

        with registry_lock:
            if wallet_id in wallets:
                return jsonify({'success': False, 'error': 'Wallet already exists', 'wallet_id': wallet_id}), 409

            result = wallet.initialize(owners, threshold)
            if result.ok:
                wallets[wallet_id] = wallet
    except (KeyError, TypeError, ValueError) as e:
        logger.info("Rejected wallet creation: %s", e)
        return jsonify({'success': False, 'error': str(e)}), 400

    if not result.ok:
        return _failure(result)

    logger.info("Created wallet %s with %s owners", wallet_id[:16], len(owners))

    return jsonify({
        'success': True,
        'wallet_id': wallet_id,
        'owners': wallet.get_owners(),
        'threshold': wallet.get_threshold()
    }), 201


@app.route('/api/wallets/<wallet_id>')
def get_wallet(wallet_id):
    """Get wallet information"""
    if wallet_id not in wallets:
        return _not_found()

    wallet = wallets[wallet_id]
    return jsonify({
        'wallet_id': wallet_id,
        'owners': wallet.get_owners(),
        'threshold': wallet.get_threshold(),
        'balance': wallet.custody.balance,
        'current_height': wallet.clock.current_height(),
        'transaction_count': wallet.transaction_count(),
        'transfer_history': wallet.custody.get_transfer_history()
    })


@app.route('/api/wallets/<wallet_id>/transactions', methods=['POST'])
def propose_transaction(wallet_id):
    """Propose a payout; the caller becomes its first signer"""
    if wallet_id not in wallets:
        return _not_found()

    caller = _authenticated_caller()
    if caller is None:
        return _unauthenticated()

    data = request.get_json(silent=True) or {}
    try:
        result = wallets[wallet_id].propose(
            recipient=data['recipient'],
            amount=_int_field(data, 'amount'),
            expiration=_int_field(data, 'expiration'),
            caller=caller
        )
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    if not result.ok:
        return _failure(result)
    return jsonify({'success': True, 'transaction_id': result.value}), 201


@app.route('/api/wallets/<wallet_id>/transactions/<int:tx_id>/sign', methods=['POST'])
def sign_transaction(wallet_id, tx_id):
    if wallet_id not in wallets:
        return _not_found()

    caller = _authenticated_caller()
    if caller is None:
        return _unauthenticated()

    wallet = wallets[wallet_id]
    result = wallet.sign(tx_id, caller)
    if not result.ok:
        return _failure(result)
    return jsonify({'success': True, 'signature_count': wallet.signature_count(tx_id)})


@app.route('/api/wallets/<wallet_id>/transactions/<int:tx_id>/execute', methods=['POST'])
def execute_transaction(wallet_id, tx_id):
    """Execute a transaction that has reached quorum"""
    if wallet_id not in wallets:
        return _not_found()

    caller = _authenticated_caller()
    if caller is None:
        return _unauthenticated()

    wallet = wallets[wallet_id]
    try:
        result = wallet.execute(tx_id, caller)
    except TransferError as e:
        logger.warning("Execution of %s in wallet %s failed: %s", tx_id, wallet_id[:16], e)
        return jsonify({'success': False, 'error': 'TRANSFER_FAILED'}), 400

    if not result.ok:
        return _failure(result)
    return jsonify({'success': True, 'remaining_balance': wallet.custody.balance})


@app.route('/api/wallets/<wallet_id>/transactions/<int:tx_id>')
def get_transaction(wallet_id, tx_id):
    if wallet_id not in wallets:
        return _not_found()

    wallet = wallets[wallet_id]
    tx = wallet.get_transaction(tx_id)
    info = {
        'transaction_id': tx_id,
        'signature_count': wallet.signature_count(tx_id),
        'exists': tx is not None
    }
    if tx is not None:
        info.update(tx.to_dict())

    who = request.args.get('who')
    if who:
        info['has_signed'] = wallet.has_signed(tx_id, who)

    return jsonify(info)


@app.route('/api/wallets/<wallet_id>/advance', methods=['POST'])
def advance_clock(wallet_id):
    """Advance the wallet's block clock; owners only"""
    if wallet_id not in wallets:
        return _not_found()

    caller = _authenticated_caller()
    if caller is None:
        return _unauthenticated()

    wallet = wallets[wallet_id]
    if not wallet.is_owner(caller):
        return _failure(Result.failure(WalletError.NOT_AUTHORIZED))

    data = request.get_json(silent=True) or {}
    try:
        height = wallet.clock.advance(_int_field(data, 'blocks', 1))
    except (TypeError, ValueError) as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    return jsonify({'success': True, 'current_height': height})


if __name__ == "__main__":
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    app.run(
        host="0.0.0.0",
        port=config.port,
        debug=False
    )
