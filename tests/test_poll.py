import pytest

from coroweave.poll import PollOp, PollStatus, poll_op_readable, poll_op_writeable


def test_read_write_is_union_of_read_and_write():
    combined = PollOp(int(PollOp.READ) | int(PollOp.WRITE))
    assert combined == PollOp.READ_WRITE
    assert poll_op_readable(combined) is True
    assert poll_op_writeable(combined) is True


def test_read_and_write_bits_are_disjoint():
    assert int(PollOp.READ) & int(PollOp.WRITE) == 0
    assert poll_op_writeable(PollOp.READ) is False
    assert poll_op_readable(PollOp.WRITE) is False


@pytest.mark.parametrize(
    "op, readable, writeable",
    [
        (PollOp.READ, True, False),
        (PollOp.WRITE, False, True),
        (PollOp.READ_WRITE, True, True),
    ],
)
def test_readable_and_writeable(op, readable, writeable):
    assert poll_op_readable(op) is readable
    assert poll_op_writeable(op) is writeable


def test_poll_status_members_are_distinct():
    statuses = {PollStatus(status.value) for status in PollStatus}
    assert statuses == {
        PollStatus.EVENT,
        PollStatus.TIMEOUT,
        PollStatus.ERROR,
        PollStatus.CLOSED,
    }
    assert len(statuses) == 4


def test_poll_status_lookup_by_value():
    assert PollStatus("timeout") is PollStatus.TIMEOUT