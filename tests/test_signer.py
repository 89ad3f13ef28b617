from data.signer import SignatureRequest, generate_public_key, is_owner, load_signer, recover_signer


def test_signature_request_message_layout():
    request = SignatureRequest(
        public_key="0xabc", contract_address="0xC0FFEE", chain_id=11155111, start_timestamp=1700000000, duration_days=30
    )
    assert request.message() == (
        "publickey:0xabc\n"
        "contractAddresses:0xC0FFEE\n"
        "contractsChainId:11155111\n"
        "startTimestamp:1700000000\n"
        "durationDays:30"
    )


def test_generated_public_key_shape():
    key = generate_public_key()
    assert key.startswith("0x")
    assert len(key) == 2002
    int(key, 16)


def test_signature_recovers_signer_address(owner):
    signature = owner.sign_message("hello")
    assert recover_signer("hello", signature) == owner.address


def test_signature_does_not_recover_other_address(owner, other):
    signature = other.sign_message("hello")
    assert recover_signer("hello", signature) != owner.address


def test_loaded_signer_is_stable():
    key = "0x" + "33" * 32
    assert load_signer(key).address == load_signer(key).address


def test_fresh_signers_differ():
    assert load_signer().address != load_signer().address


def test_is_owner_ignores_case():
    assert is_owner("0xABCdef", "0xabcDEF")
    assert not is_owner("0xabc", "0xabd")
    assert not is_owner(None, "0xabc")
    assert not is_owner("", "0xabc")
