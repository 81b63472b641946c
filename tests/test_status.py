import pytest

from rtkernel.status import OsError, StatusType, strerror


def test_ok_name():
    assert strerror(StatusType.E_OK) == "E_OK"


def test_plain_int_is_accepted():
    assert strerror(4) == "E_OS_LIMIT"


def test_last_known_code():
    assert strerror(36) == "E_OS_PROTECTION_COUNT_ISR"


@pytest.mark.parametrize("code", [37, 38, 255, 1000, -1])
def test_out_of_range_is_unknown(code):
    assert strerror(code) == "unknown error"


@pytest.mark.parametrize("member", list(StatusType))
def test_every_member_maps_to_its_name(member):
    assert strerror(member) == member.name


def test_codes_are_contiguous():
    count = len(StatusType)
    names = [strerror(code) for code in range(count)]
    assert names == [StatusType(code).name for code in range(count)]
    assert "unknown error" not in names
    assert strerror(count) == "unknown error"


def test_oserror_carries_status_and_service():
    err = OsError(StatusType.E_OS_ID, "ActivateTask")
    assert err.status == StatusType.E_OS_ID
    assert err.service == "ActivateTask"
    assert "E_OS_ID" in str(err)
    assert "ActivateTask" in str(err)


def test_oserror_is_raisable():
    err = OsError(StatusType.E_OS_STATE)
    assert err.status == StatusType.E_OS_STATE
    assert err.service is None
    assert str(err) == "E_OS_STATE"
    with pytest.raises(OsError) as info:
        raise err
    assert info.value is err