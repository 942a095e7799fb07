"""
Unit tests for token_metadata_client.models.

Tests cover:
- TokenStandard helpers (edition and verification predicates)
- AssetData / Data / DataV2 validation and serialization
- PrintSupply, CollectionDetails, AuthorizationData encodings
- Toggle semantics in UpdateArgs
- Delegate role table and DelegateArgs / RevokeArgs encodings
"""

import pytest
from borsh_construct import U64
from solders.pubkey import Pubkey

from token_metadata_client import enums
from token_metadata_client.errors import InvalidInputError
from token_metadata_client.models import (
    ROLE_TABLE,
    AssetData,
    AuthorizationData,
    Collection,
    CollectionDetails,
    Creator,
    Data,
    DataV2,
    DelegateArgs,
    DelegateFamily,
    DelegateRole,
    MetadataDelegateRole,
    PayloadValue,
    PrintSupply,
    RevokeArgs,
    Toggle,
    TokenStandard,
    UpdateArgs,
    UseMethod,
    Uses,
    encode_option,
    requires_edition,
    supports_verification,
)

# ================================================================
# Token standards
# ================================================================


class TestTokenStandard:
    """Predicates deciding which optional accounts an asset needs."""

    @pytest.mark.parametrize(
        ("standard", "expected"),
        [
            (None, True),
            (TokenStandard.NON_FUNGIBLE, True),
            (TokenStandard.NON_FUNGIBLE_EDITION, True),
            (TokenStandard.PROGRAMMABLE_NON_FUNGIBLE, True),
            (TokenStandard.PROGRAMMABLE_NON_FUNGIBLE_EDITION, True),
            (TokenStandard.FUNGIBLE, False),
            (TokenStandard.FUNGIBLE_ASSET, False),
        ],
    )
    def test_requires_edition(self, standard: TokenStandard | None, expected: bool) -> None:
        assert requires_edition(standard) is expected

    @pytest.mark.parametrize(
        ("standard", "expected"),
        [
            (None, True),
            (TokenStandard.NON_FUNGIBLE, True),
            (TokenStandard.PROGRAMMABLE_NON_FUNGIBLE, True),
            (TokenStandard.NON_FUNGIBLE_EDITION, False),
            (TokenStandard.FUNGIBLE, False),
            (TokenStandard.FUNGIBLE_ASSET, False),
        ],
    )
    def test_supports_verification(
        self, standard: TokenStandard | None, expected: bool
    ) -> None:
        assert supports_verification(standard) is expected

    def test_wire_tags(self) -> None:
        assert [int(s) for s in TokenStandard] == [0, 1, 2, 3, 4, 5]

    def test_is_programmable(self) -> None:
        assert TokenStandard.PROGRAMMABLE_NON_FUNGIBLE.is_programmable
        assert not TokenStandard.NON_FUNGIBLE.is_programmable


# ================================================================
# Data payloads
# ================================================================


def _asset_data(**kwargs: object) -> AssetData:
    defaults: dict[str, object] = {
        "name": "Asset",
        "symbol": "AST",
        "uri": "https://example.com/a.json",
        "seller_fee_basis_points": 100,
        "token_standard": TokenStandard.NON_FUNGIBLE,
    }
    defaults.update(kwargs)
    return AssetData(**defaults)  # type: ignore[arg-type]


class TestDataValidation:
    """Length and range checks shared by AssetData, Data and DataV2."""

    @pytest.mark.parametrize(
        ("field", "value", "match"),
        [
            ("name", "n" * 33, "Name exceeds 32"),
            ("symbol", "s" * 11, "Symbol exceeds 10"),
            ("uri", "u" * 201, "URI exceeds 200"),
            ("seller_fee_basis_points", 10_001, "seller_fee_basis_points"),
            ("seller_fee_basis_points", -1, "seller_fee_basis_points"),
        ],
    )
    def test_asset_data_limits(self, field: str, value: object, match: str) -> None:
        with pytest.raises(InvalidInputError, match=match):
            _asset_data(**{field: value})

    def test_limits_are_inclusive(self) -> None:
        _asset_data(name="n" * 32, symbol="s" * 10, uri="u" * 200, seller_fee_basis_points=10_000)

    def test_data_and_data_v2_validate(self) -> None:
        with pytest.raises(InvalidInputError):
            Data(name="n" * 33, symbol="", uri="")
        with pytest.raises(InvalidInputError):
            DataV2(name="", symbol="s" * 11, uri="")

    def test_too_many_creators(self) -> None:
        creators = [Creator(Pubkey.new_unique(), share=20) for _ in range(6)]
        with pytest.raises(InvalidInputError, match="At most 5 creators"):
            _ = _asset_data(creators=creators).serialized

    def test_creator_share_range(self) -> None:
        with pytest.raises(InvalidInputError, match="share"):
            Creator(Pubkey.new_unique(), share=101)


class TestAssetDataSerialization:
    """AssetData is encoded in the program's field order."""

    def test_minimal_layout(self) -> None:
        data = _asset_data(name="A", symbol="B", uri="C", seller_fee_basis_points=5)
        expected = (
            b"\x01\x00\x00\x00A"
            + b"\x01\x00\x00\x00B"
            + b"\x01\x00\x00\x00C"
            + b"\x05\x00"  # seller fee
            + b"\x00"  # creators
            + b"\x00"  # primary_sale_happened
            + b"\x01"  # is_mutable
            + b"\x00"  # token standard
            + b"\x00\x00\x00\x00"  # collection, uses, collection_details, rule_set
        )
        assert data.serialized == expected

    def test_optional_fields(self) -> None:
        creator = Pubkey.new_unique()
        collection = Pubkey.new_unique()
        rule_set = Pubkey.new_unique()
        data = _asset_data(
            name="",
            symbol="",
            uri="",
            seller_fee_basis_points=0,
            token_standard=TokenStandard.PROGRAMMABLE_NON_FUNGIBLE,
            creators=[Creator(creator, verified=True, share=100)],
            collection=Collection(collection),
            uses=Uses(UseMethod.MULTIPLE, remaining=2, total=3),
            collection_details=CollectionDetails.v1(7),
            rule_set=rule_set,
        )
        expected = (
            b"\x00\x00\x00\x00" * 3
            + b"\x00\x00"
            + b"\x01\x01\x00\x00\x00"
            + bytes(creator)
            + b"\x01\x64"
            + b"\x00\x01\x04"
            + b"\x01\x00"
            + bytes(collection)
            + b"\x01\x01"  # uses: Some, MULTIPLE
            + U64.build(2)
            + U64.build(3)
            + b"\x01\x00"
            + U64.build(7)
            + b"\x01"
            + bytes(rule_set)
        )
        assert data.serialized == expected


class TestPrintSupply:
    def test_variants(self) -> None:
        assert PrintSupply.zero().serialized == b"\x00"
        assert PrintSupply.limited(5).serialized == b"\x01" + U64.build(5)
        assert PrintSupply.unlimited().serialized == b"\x02"

    def test_negative_limit(self) -> None:
        with pytest.raises(InvalidInputError):
            PrintSupply.limited(-1)


class TestCollectionDetails:
    def test_v1(self) -> None:
        assert CollectionDetails.v1(3).serialized == b"\x00" + U64.build(3)

    def test_v2(self) -> None:
        details = CollectionDetails(version=enums.COLLECTION_DETAILS_V2, padding=b"\x07" * 8)
        assert details.serialized == b"\x01" + b"\x07" * 8

    def test_unknown_version(self) -> None:
        with pytest.raises(InvalidInputError, match="Unknown CollectionDetails"):
            _ = CollectionDetails(version=9).serialized


class TestAuthorizationData:
    """Authorization payloads are borsh maps sorted by key."""

    def test_empty(self) -> None:
        assert AuthorizationData().serialized == b"\x00\x00\x00\x00"

    def test_sorted_entries(self) -> None:
        pk = Pubkey.new_unique()
        data = AuthorizationData(
            {"b": PayloadValue.number(9), "a": PayloadValue.pubkey(pk)}
        )
        expected = (
            b"\x02\x00\x00\x00"
            + b"\x01\x00\x00\x00a"
            + b"\x00"
            + bytes(pk)
            + b"\x01\x00\x00\x00b"
            + b"\x03"
            + U64.build(9)
        )
        assert data.serialized == expected

    def test_seeds_and_proof(self) -> None:
        seeds = PayloadValue.seeds([b"ab"])
        assert seeds.serialized == b"\x01" + b"\x01\x00\x00\x00" + b"\x02\x00\x00\x00ab"
        proof = PayloadValue.merkle_proof([b"\x01" * 32])
        assert proof.serialized == b"\x02" + b"\x01\x00\x00\x00" + b"\x01" * 32

    def test_proof_node_length(self) -> None:
        with pytest.raises(InvalidInputError, match="32 bytes"):
            PayloadValue.merkle_proof([b"\x01"])

    def test_encode_option(self) -> None:
        assert encode_option(None, bytes) == b"\x00"
        assert encode_option(AuthorizationData(), lambda a: a.serialized) == b"\x01" + b"\x00" * 4


# ================================================================
# Update toggles
# ================================================================


class TestToggle:
    """NONE leaves a field untouched, CLEAR removes it, SET replaces it."""

    def test_default_is_none(self) -> None:
        assert Toggle().is_none
        assert Toggle.none().encode(bytes) == b"\x00"

    def test_clear(self) -> None:
        assert Toggle.clear().encode(bytes) == b"\x01"

    def test_set(self) -> None:
        pk = Pubkey.new_unique()
        assert Toggle.set(pk).encode(bytes) == b"\x02" + bytes(pk)

    def test_set_requires_value(self) -> None:
        with pytest.raises(InvalidInputError, match="Toggle.clear"):
            Toggle.set(None)

    def test_update_args_default(self) -> None:
        # 4 plain options, 4 toggles, authorization data option
        assert UpdateArgs().serialized == b"\x00" * 9

    def test_update_args_fields(self) -> None:
        rule_set = Pubkey.new_unique()
        args = UpdateArgs(
            is_mutable=False,
            collection=Toggle.clear(),
            rule_set=Toggle.set(rule_set),
        )
        expected = (
            b"\x00"  # new_update_authority
            + b"\x00"  # data
            + b"\x00"  # primary_sale_happened
            + b"\x01\x00"  # is_mutable = Some(false)
            + b"\x01"  # collection: clear
            + b"\x00"  # collection_details
            + b"\x00"  # uses
            + b"\x02"
            + bytes(rule_set)
            + b"\x00"  # authorization_data
        )
        assert args.serialized == expected


# ================================================================
# Delegates
# ================================================================


class TestRoleTable:
    """Every delegate role maps to a family and its wire tags."""

    def test_every_role_is_listed(self) -> None:
        assert set(ROLE_TABLE) == set(DelegateRole)

    @pytest.mark.parametrize(
        "role",
        [
            DelegateRole.SALE,
            DelegateRole.TRANSFER,
            DelegateRole.UTILITY,
            DelegateRole.STAKING,
            DelegateRole.LOCKED_TRANSFER,
            DelegateRole.PRINT_DELEGATE,
            DelegateRole.MIGRATION,
        ],
    )
    def test_token_record_family(self, role: DelegateRole) -> None:
        assert role.family is DelegateFamily.TOKEN_RECORD

    @pytest.mark.parametrize(
        ("role", "metadata_role"),
        [
            (DelegateRole.AUTHORITY_ITEM, MetadataDelegateRole.AUTHORITY_ITEM),
            (DelegateRole.DATA, MetadataDelegateRole.DATA),
            (DelegateRole.DATA_ITEM, MetadataDelegateRole.DATA_ITEM),
            (DelegateRole.COLLECTION, MetadataDelegateRole.COLLECTION),
            (DelegateRole.COLLECTION_ITEM, MetadataDelegateRole.COLLECTION_ITEM),
            (DelegateRole.PROGRAMMABLE_CONFIG, MetadataDelegateRole.PROGRAMMABLE_CONFIG),
            (
                DelegateRole.PROGRAMMABLE_CONFIG_ITEM,
                MetadataDelegateRole.PROGRAMMABLE_CONFIG_ITEM,
            ),
        ],
    )
    def test_metadata_record_family(
        self, role: DelegateRole, metadata_role: MetadataDelegateRole
    ) -> None:
        assert role.family is DelegateFamily.METADATA_RECORD
        assert role.spec.metadata_role is metadata_role

    def test_standard_family(self) -> None:
        assert DelegateRole.STANDARD.family is DelegateFamily.STANDARD

    def test_delegate_tags_are_unique(self) -> None:
        tags = [s.delegate_tag for s in ROLE_TABLE.values() if s.delegate_tag is not None]
        assert sorted(tags) == list(range(14))

    def test_revoke_tags_are_unique(self) -> None:
        assert sorted(s.revoke_tag for s in ROLE_TABLE.values()) == list(range(15))


class TestDelegateArgs:
    def test_sale_carries_amount_and_auth_data(self) -> None:
        args = DelegateArgs(DelegateRole.SALE, amount=1)
        assert args.serialized == (
            bytes([enums.DELEGATE_SALE_V1]) + U64.build(1) + b"\x00"
        )

    def test_collection_carries_auth_data_only(self) -> None:
        args = DelegateArgs(DelegateRole.COLLECTION)
        assert args.serialized == bytes([enums.DELEGATE_COLLECTION_V1]) + b"\x00"

    def test_standard_has_no_auth_data(self) -> None:
        args = DelegateArgs(DelegateRole.STANDARD, amount=5)
        assert args.serialized == bytes([enums.DELEGATE_STANDARD_V1]) + U64.build(5)

    def test_locked_transfer(self) -> None:
        locked = Pubkey.new_unique()
        args = DelegateArgs(DelegateRole.LOCKED_TRANSFER, amount=1, locked_address=locked)
        assert args.serialized == (
            bytes([enums.DELEGATE_LOCKED_TRANSFER_V1])
            + U64.build(1)
            + bytes(locked)
            + b"\x00"
        )

    def test_locked_transfer_requires_address(self) -> None:
        with pytest.raises(InvalidInputError, match="locked_address"):
            DelegateArgs(DelegateRole.LOCKED_TRANSFER)

    def test_migration_is_revoke_only(self) -> None:
        with pytest.raises(InvalidInputError, match="can only be revoked"):
            DelegateArgs(DelegateRole.MIGRATION)

    def test_revoke(self) -> None:
        assert RevokeArgs(DelegateRole.MIGRATION).serialized == bytes(
            [enums.REVOKE_MIGRATION_V1]
        )
        assert RevokeArgs(DelegateRole.SALE).serialized == bytes([enums.REVOKE_SALE_V1])
