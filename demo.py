#!/usr/bin/env python3
"""
Complete demo of the Multi-Signature Wallet
"""

from multisig_wallet.wallet import MultiSigWallet
from multisig_wallet.custody import BlockClock, CustodyAccount
from multisig_wallet.identity import OwnerKey

def show(label, result):
    if result.ok:
        print(f"   ✅ {label}: {result.value}")
    else:
        print(f"   ❌ {label}: {result.error.name} ({result.error.code})")

def main():
    print("=" * 60)
    print("🔐 MULTI-SIGNATURE WALLET - COMPLETE DEMO")
    print("=" * 60)
    print()

    # Step 1: Setup
    print("🔧 STEP 1: Generating owner keys")
    print("-" * 40)

    owners = {}
    for name in ["Alice", "Bob", "Carol"]:
        key = OwnerKey()
        owners[name] = key.identity
        print(f"✅ {name}: {key.identity[:16]}...")

    dave = OwnerKey().identity
    print(f"✅ Dave (recipient, not an owner): {dave[:16]}...")
    print()

    # Step 2: Create wallet
    print("🏗️  STEP 2: Initializing 2-of-3 wallet")
    print("-" * 40)

    clock = BlockClock(start_height=100)
    custody = CustodyAccount(balance=100_000)
    wallet = MultiSigWallet(clock, custody)

    show("initialize", wallet.initialize(list(owners.values()), 2))
    show("initialize with threshold 4", wallet.initialize(list(owners.values()), 4))
    print(f"   Threshold: {wallet.get_threshold()}-of-{len(wallet.get_owners())}")
    print(f"   Custody balance: {custody.balance:,}")
    print()

    # Step 3: Propose, sign, execute
    print("💸 STEP 3: Paying Dave 1,000 (expires at height 200)")
    print("-" * 40)

    proposed = wallet.propose(dave, 1000, 200, owners["Alice"])
    show("Alice proposes", proposed)
    tx_id = proposed.value

    show("Dave proposes", wallet.propose(dave, 1000, 200, dave))
    show("execute with 1 signature", wallet.execute(tx_id, dave))
    show("Bob signs", wallet.sign(tx_id, owners["Bob"]))
    show("Bob signs again", wallet.sign(tx_id, owners["Bob"]))
    print(f"   Signatures: {wallet.signature_count(tx_id)}")
    show("Dave executes", wallet.execute(tx_id, dave))
    show("Dave executes again", wallet.execute(tx_id, dave))
    print(f"   Custody balance: {custody.balance:,}")
    print()

    # Step 4: Expiration
    print("⏳ STEP 4: Proposal expiring at the current height")
    print("-" * 40)

    expired = wallet.propose(dave, 500, clock.current_height(), owners["Carol"])
    show("Carol proposes", expired)
    show("Alice signs", wallet.sign(expired.value, owners["Alice"]))
    show("Carol executes", wallet.execute(expired.value, owners["Carol"]))
    print()

    # Step 5: Summary
    print("📊 Final Statistics:")
    print(f"   Transactions proposed: {wallet.transaction_count()}")
    print(f"   Payouts: {len(custody.get_transfer_history())}")
    print(f"   Custody balance: {custody.balance:,}")

if __name__ == "__main__":
    main()
