from enum import Enum


class PersonnelRole(str, Enum):
    player = "PLAYER"
    white_cell = "WHITE_CELL"
    planning = "PLANNING"
    support = "SUPPORT"


class FundingType(str, Enum):
    rpa = "RPA"
    om = "OM"


class OmCategory(str, Enum):
    contract = "CONTRACT"
    transportation = "TRANSPORTATION"
    billeting = "BILLETING"
    port_a_potty = "PORT_A_POTTY"
    rentals_vscos = "RENTALS_VSCOS"
    consumables = "CONSUMABLES"
    wrm = "WRM"
    other = "OTHER"
