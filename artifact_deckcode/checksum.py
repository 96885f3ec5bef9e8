def compute_checksum(bytes_buffer: bytes):
    checksum = 0
    for b in bytes_buffer:
        checksum += b
    return checksum & 0x0FF
