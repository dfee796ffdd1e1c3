# File: pipe_flow_analyzer/core/constants.py
"""
Physical constants and fixed thresholds shared across the package
"""

G = 9.81                     # Gravitational acceleration (m/s²)
P_ATM = 101325.0             # Atmospheric pressure (Pa)

# Flow regime boundaries (Reynolds number)
RE_LAMINAR_MAX = 2300.0
RE_TURBULENT_MIN = 4000.0

# Colebrook-White Newton-Raphson
COLEBROOK_MAX_ITER = 20
COLEBROOK_TOLERANCE = 1e-8
F_MIN = 0.008                # Lower bound of physically typical Darcy f
F_MAX = 0.10                 # Upper bound of physically typical Darcy f

# Diagnostics are only reported inside this Reynolds window
RE_DIAGNOSTIC_MIN = 100.0
RE_DIAGNOSTIC_MAX = 1e6
RE_RANGE_CHECK_MAX = 1e7

# System curve sampling
SYSTEM_CURVE_POINTS = 50
SYSTEM_CURVE_SPAN = 1.5      # Sampled over [0, span * Q_design]

# Power
DEFAULT_PUMP_EFFICIENCY = 0.70
MIN_PUMP_EFFICIENCY = 0.01
MOTOR_MARGIN = 1.15          # 15% design margin on shaft power
