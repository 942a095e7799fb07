from token_metadata_client import constants as const


def test_constants() -> None:
    # key + update authority + mint + (name, symbol, uri with length prefixes)
    # + seller fee + creators option tag + creators vec length
    assert const.OFFSET_TO_CREATORS == (
        1
        + 2 * const.PUBKEY_LENGTH
        + (4 + const.MAX_NAME_LENGTH)
        + (4 + const.MAX_SYMBOL_LENGTH)
        + (4 + const.MAX_URI_LENGTH)
        + 2
        + 1
        + 4
    )
    assert const.EDITION_MARKER_BIT_SIZE == 31 * 8

    assert (
        const.PRIORITY_FEE_NONE
        < const.PRIORITY_FEE_LOW
        < const.PRIORITY_FEE_MEDIUM
        < const.PRIORITY_FEE_HIGH
        < const.PRIORITY_FEE_MAX
    )
    assert const.CREATE_MINT_COMPUTE_UNITS >= const.TRANSFER_COMPUTE_UNITS
    assert const.TRANSFER_COMPUTE_UNITS >= const.BURN_COMPUTE_UNITS
    assert const.RETRY_MAX_ATTEMPTS == 3
    assert const.DEFAULT_COMPUTE_UNIT_MULTIPLIER > 1

    print("Token Metadata Layout Sizes:")
    print("OFFSET_TO_CREATORS:\t\t", const.OFFSET_TO_CREATORS)
    print("MINT_LAYOUT_SIZE:\t\t", const.MINT_LAYOUT_SIZE)
    print("TOKEN_ACCOUNT_SIZE:\t\t", const.TOKEN_ACCOUNT_SIZE)
