"""Cartridge headers, bank storage and memory bank controllers."""