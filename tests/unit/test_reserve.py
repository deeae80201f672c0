"""
Reserve Layer Unit Tests
Tests for core/reserve (serialization, registry, service)
"""
import pytest

from core.merkle import compute_merkle_root, verify_merkle_proof, ProofStep
from core.reserve import (
    DEFAULT_ACCOUNTS,
    RESERVE_BRANCH_TAG,
    RESERVE_LEAF_TAG,
    Account,
    AccountRegistry,
    AccountsFileError,
    DuplicateAccountError,
    InvalidProofError,
    ReserveError,
    ReserveService,
    compute_reserve_root,
    decode_proof,
    generate_reserve_proof,
    serialize_account,
)

from fixtures import make_account, make_registry, write_accounts_file


DEFAULT_ROOT = "b1231de33da17c23cebd80c104b88198e0914b0463d0e14db163605b904a7ba3"
ACCOUNT_1_PROOF = [
    ("04bd4a356d675cc13ea5b0fc83e0736a3fbf3067980de9e8e0553c934f5906b8", 1),
    ("d185af244042b0fecba7ee16c9933d73b10c5482104538274dd777b6b120eae1", 1),
    ("9d7f79fa8e788d4a32c9c674b67dcfaf0885f539ac2699129e3c4d88c11c76e7", 1),
]


class TestSerialization:
    """Tests for serialize_account()."""

    @pytest.mark.parametrize(
        "account_id,balance,expected",
        [
            (10, 100, b"(10,100)"),
            (1, 0, b"(1,0)"),
            (1, -100, b"(1,-100)"),
            (1, 1111, b"(1,1111)"),
        ],
    )
    def test_format(self, account_id, balance, expected):
        assert serialize_account(make_account(account_id, balance)) == expected

    def test_no_whitespace(self):
        assert b" " not in serialize_account(make_account(123456, 7890))


class TestAccountModel:
    """Tests for the Account model."""

    def test_frozen(self):
        account = make_account()
        with pytest.raises(Exception):
            account.balance = 5

    def test_extra_fields_rejected(self):
        with pytest.raises(Exception):
            Account(id=1, balance=1, name="x")


class TestAccountRegistry:
    """Tests for AccountRegistry."""

    def test_default_accounts(self):
        registry = AccountRegistry()

        assert len(registry) == 8
        assert [a.id for a in registry] == list(range(1, 9))
        assert registry.get(3).balance == 3333

    def test_sorted_by_id(self):
        registry = make_registry([(3, 300), (1, 100), (2, 200)])

        assert [a.id for a in registry.sorted_accounts()] == [1, 2, 3]
        assert registry.records() == [b"(1,100)", b"(2,200)", b"(3,300)"]

    def test_duplicate_rejected(self):
        with pytest.raises(DuplicateAccountError) as exc_info:
            make_registry([(1, 100), (1, 200)])

        assert exc_info.value.details == {"account_id": 1}
        assert isinstance(exc_info.value, ReserveError)
        assert str(exc_info.value).startswith("[DUPLICATE_ACCOUNT]")

    @pytest.mark.parametrize("account_id", [999, -1, 0, 1.5, "1", True, None])
    def test_unknown_ids(self, account_id):
        registry = AccountRegistry()

        assert registry.index_of(account_id) is None
        assert registry.get(account_id) is None
        assert account_id not in registry

    def test_index_of(self):
        registry = make_registry([(30, 1), (10, 1), (20, 1)])

        assert registry.index_of(10) == 0
        assert registry.index_of(30) == 2

    def test_from_records(self):
        registry = AccountRegistry.from_records([{"id": 2, "balance": 5}, {"id": 1, "balance": 7}])

        assert registry.records() == [b"(1,7)", b"(2,5)"]

    def test_from_records_invalid(self):
        with pytest.raises(AccountsFileError) as exc_info:
            AccountRegistry.from_records([{"id": "abc", "balance": 5}])

        assert "errors" in exc_info.value.details

    def test_from_json_file(self, tmp_path):
        path = write_accounts_file(tmp_path / "accounts.json", [(2, 20), (1, 10)])

        registry = AccountRegistry.from_file(path)

        assert registry.records() == [b"(1,10)", b"(2,20)"]

    def test_from_json_object_with_accounts_key(self, tmp_path):
        path = tmp_path / "accounts.json"
        path.write_text('{"accounts": [{"id": 5, "balance": 50}]}', encoding="utf-8")

        assert AccountRegistry.from_file(path).records() == [b"(5,50)"]

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "accounts.yaml"
        path.write_text(
            "accounts:\n  - id: 1\n    balance: 10\n  - id: 2\n    balance: 20\n",
            encoding="utf-8",
        )

        assert AccountRegistry.from_file(path).records() == [b"(1,10)", b"(2,20)"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(AccountsFileError, match="not found"):
            AccountRegistry.from_file(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(AccountsFileError):
            AccountRegistry.from_file(path)

    def test_non_list_content(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"id": 1}', encoding="utf-8")

        with pytest.raises(AccountsFileError, match="list of accounts"):
            AccountRegistry.from_file(path)


class TestReserveService:
    """Tests for ReserveService."""

    def test_default_root(self, default_service):
        assert default_service.compute_root_hex() == DEFAULT_ROOT

    def test_module_level_root(self):
        assert compute_reserve_root() == DEFAULT_ROOT

    def test_default_proof_for_account_1(self, default_service):
        proof = default_service.generate_proof(1)

        assert proof.balance == 1111
        assert proof.proof == ACCOUNT_1_PROOF

    def test_module_level_proof(self):
        assert generate_reserve_proof(1).proof == ACCOUNT_1_PROOF

    @pytest.mark.parametrize("account_id", [999, -1, 0, 1.5])
    def test_unknown_account_returns_none(self, default_service, account_id):
        assert default_service.generate_proof(account_id) is None

    def test_every_default_proof_verifies(self, default_service):
        root = default_service.compute_root()

        for account in DEFAULT_ACCOUNTS:
            reserve_proof = default_service.generate_proof(account.id)
            steps = [ProofStep.from_pair(h, p) for h, p in reserve_proof.proof]
            recomputed = verify_merkle_proof(
                serialize_account(account), steps, RESERVE_LEAF_TAG, RESERVE_BRANCH_TAG
            )
            assert recomputed == root
            assert default_service.verify_proof(account, reserve_proof.proof)

    def test_odd_registry_last_account(self, small_service):
        reserve_proof = small_service.generate_proof(3)

        assert reserve_proof.balance == 300
        assert len(reserve_proof.proof) == 2
        assert small_service.verify_proof(make_account(3, 300), reserve_proof.proof)

    def test_wrong_balance_fails(self, default_service):
        proof = default_service.generate_proof(2).proof

        assert not default_service.verify_proof(make_account(2, 9999), proof)

    def test_verify_against_explicit_root(self, default_service):
        assert default_service.verify_proof(make_account(1, 1111), ACCOUNT_1_PROOF, DEFAULT_ROOT)
        assert not default_service.verify_proof(
            make_account(1, 1111), ACCOUNT_1_PROOF, "00" * 32
        )

    def test_recompute_root_hex(self, default_service):
        assert default_service.recompute_root_hex(make_account(1, 1111), ACCOUNT_1_PROOF) == DEFAULT_ROOT

    def test_single_account_registry(self):
        service = ReserveService(make_registry([(42, 7)]))
        reserve_proof = service.generate_proof(42)

        assert reserve_proof.proof == []
        assert service.verify_proof(make_account(42, 7), [])

    def test_empty_registry(self):
        service = ReserveService(make_registry([]))

        assert service.compute_root_hex() == "0" * 64
        assert service.generate_proof(1) is None

    def test_custom_tags_change_root(self):
        service = ReserveService(leaf_tag="OtherLeaf", branch_tag="OtherBranch")

        assert service.compute_root_hex() != DEFAULT_ROOT

    def test_root_matches_engine(self, small_service):
        expected = compute_merkle_root(
            [b"(1,100)", b"(2,200)", b"(3,300)"], RESERVE_LEAF_TAG, RESERVE_BRANCH_TAG
        )

        assert small_service.compute_root() == expected


    def test_check_proof_reports_both_roots(self, default_service):
        computed, expected, ok = default_service.check_proof(
            make_account(1, 1111), ACCOUNT_1_PROOF, "0x" + DEFAULT_ROOT.upper()
        )

        assert ok is True
        assert computed == expected == DEFAULT_ROOT

    def test_check_proof_mismatch(self, default_service):
        computed, expected, ok = default_service.check_proof(make_account(1, 1), ACCOUNT_1_PROOF)

        assert ok is False
        assert expected == DEFAULT_ROOT
        assert computed != DEFAULT_ROOT

    def test_check_proof_short_root_does_not_match(self, default_service):
        _, _, ok = default_service.check_proof(make_account(1, 1111), ACCOUNT_1_PROOF, "abcd")

        assert ok is False


class TestDecodeProof:
    """Tests for decode_proof()."""

    def test_valid(self):
        steps = decode_proof(ACCOUNT_1_PROOF)

        assert len(steps) == 3
        assert all(step.position == 1 for step in steps)

    @pytest.mark.parametrize(
        "pairs",
        [
            [("zz", 0)],
            [("00" * 32, 2)],
            [("00" * 32,)],
            [5],
            [(5, 0)],
            [(None, 1)],
        ],
    )
    def test_invalid(self, pairs):
        with pytest.raises(InvalidProofError):
            decode_proof(pairs)

    def test_invalid_root_hex(self, default_service):
        with pytest.raises(InvalidProofError, match="Invalid root"):
            default_service.verify_proof(make_account(1, 1111), ACCOUNT_1_PROOF, "xyz")
