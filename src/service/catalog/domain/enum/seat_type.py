from enum import StrEnum


class SeatType(StrEnum):
    STANDARD = 'STANDARD'
    PREMIUM = 'PREMIUM'
    VIP = 'VIP'
