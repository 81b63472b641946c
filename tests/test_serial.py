from rtkernel.serial import SerialPort


class FakeHardware:
    def __init__(self):
        self.calls = []

    def init(self):
        self.calls.append("init")

    def term(self):
        self.calls.append("term")


def test_receive_without_data_returns_none():
    port = SerialPort(FakeHardware())
    port.init()
    assert port.receive() is None


def test_receive_returns_character_once():
    port = SerialPort(FakeHardware())
    port.init()
    port.on_receive("a")
    assert port.receive() == "a"
    assert port.receive() is None


def test_last_character_wins():
    port = SerialPort(FakeHardware())
    port.on_receive("a")
    port.on_receive("b")
    assert port.receive() == "b"


def test_init_and_term_drive_hardware_and_clear_data():
    hw = FakeHardware()
    port = SerialPort(hw)
    port.on_receive("x")
    port.init()
    assert port.receive() is None
    port.on_receive("y")
    port.term()
    assert port.receive() is None
    assert hw.calls == ["init", "term"]