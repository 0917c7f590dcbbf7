"""Physical constants and conversion factors used throughout hydrohead.

The engine works in US customary units (ft, in, GPM, psi, °F) as is usual
for hydronic design; SI equivalents are only used for display.
"""

# Gravitational
G_FT_S2 = 32.174  # ft/s², standard gravitational acceleration

# Flow and geometry conversions
GPM_PER_CFS = 448.831  # US gal/min in one ft³/s
IN2_PER_FT2 = 144.0
IN_PER_FT = 12.0

# Pressure
FT_WATER_PER_PSI = 2.31  # ft of water column per psi (SG = 1.0)

# Viscosity
CP_TO_LB_FT_S = 6.7197e-4  # 1 centipoise in lb/(ft·s)

# Pump power
WHP_CONSTANT = 3960.0  # GPM·ft per horsepower for water (SG = 1.0)
DEFAULT_PUMP_EFFICIENCY = 0.70  # wire-to-shaft efficiency assumed when none is given

# Heat transport (water, 500 = 8.33 lb/gal × 60 min/h × 1 Btu/lb·°F)
BTU_PER_TON_HR = 12000.0
WATER_HEAT_FACTOR = 500.0

# Reynolds number regime boundaries
RE_LAMINAR = 2300.0
RE_TURBULENT = 4000.0
