"""Constants for the Solar Battery Calculator integration."""

DOMAIN = "solar_battery_calculator"

# Configuration Keys
CONF_BATTERY_CAPACITY = "battery_capacity_kwh"
CONF_RESERVE_LEVEL = "reserve_level_percent"
CONF_EXPORT_PRICE = "export_price_per_kwh"
CONF_DISCHARGE_RATE = "discharge_rate_kw"
CONF_FILE_LOGGING = "file_logging"

# Defaults
DEFAULT_NAME = "Solar Battery Calculator"
DEFAULT_BATTERY_CAPACITY = 10.0
DEFAULT_RESERVE_LEVEL = 20.0
DEFAULT_EXPORT_PRICE = 0.0
DEFAULT_DISCHARGE_RATE = 5.0
DEFAULT_FILE_LOGGING = False

# Calculator inputs (one number entity each)
INPUT_CURRENT_LEVEL = "current_level"
INPUT_BATTERY_SIZE = "battery_size"
INPUT_RESERVE_LEVEL = "reserve_level"
INPUT_SOLAR_GENERATION = "solar_generation"
INPUT_DISCHARGE_DURATION = "discharge_duration"
INPUT_DISCHARGE_RATE = "discharge_rate"
INPUT_EXPORT_PRICE = "export_price"

# Which calculations an input feeds
BATTERY_INPUTS = frozenset({INPUT_CURRENT_LEVEL, INPUT_BATTERY_SIZE, INPUT_RESERVE_LEVEL})
CHARGE_INPUTS = frozenset({INPUT_SOLAR_GENERATION})
DISCHARGE_INPUTS = frozenset(
    {INPUT_DISCHARGE_DURATION, INPUT_DISCHARGE_RATE, INPUT_EXPORT_PRICE}
)

# Dispatcher signal for entity updates
SIGNAL_UPDATE = f"{DOMAIN}_update"

# Services
SERVICE_RECALCULATE = "recalculate"
SERVICE_LOAD_EXAMPLE = "load_example"
SERVICE_CLEAR_INPUTS = "clear_inputs"
SERVICE_CALCULATE_CHARGE_TIME = "calculate_charge_time"
SERVICE_CALCULATE_DISCHARGE = "calculate_discharge"

# Service fields
ATTR_CURRENT_LEVEL = "current_level_kwh"
ATTR_CAPACITY = "capacity_kwh"
ATTR_RESERVE_PERCENT = "reserve_percent"
ATTR_SOLAR_RATE = "solar_rate_kw"
ATTR_DURATION = "duration_minutes"
ATTR_DISCHARGE_RATE = "discharge_rate_kw"
ATTR_EXPORT_PRICE = "export_price_per_kwh"
ATTR_NOW = "now"
