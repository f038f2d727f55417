from gbcore.cgb import CGBState, Speed, VRAMBank


def test_default_state():
    state = CGBState()
    assert state.read_key1() == 0
    assert state.speed is Speed.NORMAL
    assert state.vram_bank is VRAMBank.BANK0
    assert state.wram_bank == 1


def test_speed_switch_cycle():
    state = CGBState()
    state.write_key1(0x01)
    assert state.read_key1() == 0x01
    assert state.perform_speed_switch() is True
    assert state.speed is Speed.DOUBLE
    assert state.read_key1() == 0x80
    assert state.perform_speed_switch() is False
    assert state.speed is Speed.DOUBLE


def test_switch_back_to_normal():
    state = CGBState()
    for _ in range(2):
        state.write_key1(0x01)
        state.perform_speed_switch()
    assert state.speed is Speed.NORMAL


def test_key1_only_bit_zero_prepares():
    state = CGBState()
    state.write_key1(0xFE)
    assert not state.prepare_speed_switch
    assert state.perform_speed_switch() is False


def test_speed_toggled():
    assert Speed.NORMAL.toggled() is Speed.DOUBLE
    assert Speed.DOUBLE.toggled() is Speed.NORMAL
    state = CGBState()
    assert state.speed.toggled().toggled() is Speed.NORMAL


def test_set_vram_bank():
    state = CGBState()
    state.set_vram_bank(1)
    assert state.vram_bank is VRAMBank.BANK1
    state.set_vram_bank(0)
    assert state.vram_bank is VRAMBank.BANK0