import threading

from erc20_permit.token.nonces import NonceLedger
from erc20_permit.utils import UINT256_MAX

from test_mocks import MOCK_OWNER_ADDRESS, MOCK_SPENDER_ADDRESS


def test_initial_nonce_is_zero():
    assert NonceLedger().current_nonce(MOCK_OWNER_ADDRESS) == 0


def test_consume_returns_sequence():
    ledger = NonceLedger()
    assert [ledger.consume(MOCK_OWNER_ADDRESS) for _ in range(5)] == [0, 1, 2, 3, 4]
    assert ledger.current_nonce(MOCK_OWNER_ADDRESS) == 5


def test_accounts_are_independent():
    ledger = NonceLedger()
    ledger.consume(MOCK_OWNER_ADDRESS)
    ledger.consume(MOCK_OWNER_ADDRESS)
    assert ledger.consume(MOCK_SPENDER_ADDRESS) == 0
    assert ledger.current_nonce(MOCK_OWNER_ADDRESS) == 2


def test_address_case_is_normalised():
    ledger = NonceLedger()
    ledger.consume(MOCK_OWNER_ADDRESS.lower())
    assert ledger.current_nonce(MOCK_OWNER_ADDRESS) == 1


def test_read_does_not_advance():
    ledger = NonceLedger()
    for _ in range(3):
        assert ledger.current_nonce(MOCK_OWNER_ADDRESS) == 0


def test_wraps_at_uint256():
    ledger = NonceLedger()
    ledger._nonces[MOCK_OWNER_ADDRESS] = UINT256_MAX
    assert ledger.consume(MOCK_OWNER_ADDRESS) == UINT256_MAX
    assert ledger.current_nonce(MOCK_OWNER_ADDRESS) == 0


def test_concurrent_consume_has_no_gaps_or_repeats():
    ledger = NonceLedger()
    seen = []
    seen_lock = threading.Lock()

    def worker():
        for _ in range(200):
            value = ledger.consume(MOCK_OWNER_ADDRESS)
            with seen_lock:
                seen.append(value)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(seen) == list(range(1600))
    assert ledger.current_nonce(MOCK_OWNER_ADDRESS) == 1600
