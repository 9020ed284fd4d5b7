# QOI Constants
QOI_OP_INDEX = 0x00  # 00xxxxxx
QOI_OP_DIFF = 0x40  # 01xxxxxx
QOI_OP_LUMA = 0x80  # 10xxxxxx
QOI_OP_RUN = 0xC0  # 11xxxxxx
QOI_OP_RGB = 0xFE  # 11111110
QOI_OP_RGBA = 0xFF  # 11111111

QOI_MASK_2 = 0xC0  # 11000000
QOI_MASK_6 = 0x3F  # 00111111

QOI_MAGIC = b"qoif"
QOI_HEADER_SIZE = 14
QOI_CACHE_SIZE = 64
QOI_MAX_RUN = 62

# 7 bytes of 0x00 followed by 1 byte of 0x01
QOI_END_MARKER = b"\x00\x00\x00\x00\x00\x00\x00\x01"

QOI_MAX_DIMENSION = 0xFFFFFFFF
