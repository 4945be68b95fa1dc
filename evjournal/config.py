import os


class Config:
    """Application configuration from environment variables."""

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    FLASK_ENV = os.environ.get('FLASK_ENV', 'production')
    DEBUG = FLASK_ENV == 'development'
    FLASK_HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.environ.get('FLASK_PORT', 8080))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Default tariff prices (EUR/kWh)
    DEFAULT_PRICE_PEAK = float(os.environ.get('DEFAULT_PRICE_PEAK', 0.2516))
    DEFAULT_PRICE_OFF_PEAK = float(os.environ.get('DEFAULT_PRICE_OFF_PEAK', 0.1828))
    DEFAULT_PRICE_TEMPO_BLUE_PEAK = float(os.environ.get('DEFAULT_PRICE_TEMPO_BLUE_PEAK', 0.1798))
    DEFAULT_PRICE_TEMPO_BLUE_OFF_PEAK = float(os.environ.get('DEFAULT_PRICE_TEMPO_BLUE_OFF_PEAK', 0.1296))
    DEFAULT_PRICE_TEMPO_WHITE_PEAK = float(os.environ.get('DEFAULT_PRICE_TEMPO_WHITE_PEAK', 0.3022))
    DEFAULT_PRICE_TEMPO_WHITE_OFF_PEAK = float(os.environ.get('DEFAULT_PRICE_TEMPO_WHITE_OFF_PEAK', 0.1486))
    DEFAULT_PRICE_TEMPO_RED_PEAK = float(os.environ.get('DEFAULT_PRICE_TEMPO_RED_PEAK', 0.7562))
    DEFAULT_PRICE_TEMPO_RED_OFF_PEAK = float(os.environ.get('DEFAULT_PRICE_TEMPO_RED_OFF_PEAK', 0.1526))

    # Charging
    CHARGING_EFFICIENCY = float(os.environ.get('CHARGING_EFFICIENCY', 0.9))  # battery kWh / metered kWh
    DEFAULT_BATTERY_CAPACITY_KWH = float(os.environ.get('DEFAULT_BATTERY_CAPACITY_KWH', 52))

    # Combustion reference vehicle
    GASOLINE_CONSUMPTION_L_100KM = float(os.environ.get('GASOLINE_CONSUMPTION_L_100KM', 6.5))
    GASOLINE_PRICE_PER_LITER = float(os.environ.get('GASOLINE_PRICE_PER_LITER', 1.90))
    CO2_KG_PER_LITER = float(os.environ.get('CO2_KG_PER_LITER', 2.31))  # gasoline combustion

    # Trip billing tiers
    BILLING_RATE_LOCAL = float(os.environ.get('BILLING_RATE_LOCAL', 15))
    BILLING_RATE_MEDIUM = float(os.environ.get('BILLING_RATE_MEDIUM', 25))
    LOCAL_TRIP_MAX_KM = float(os.environ.get('LOCAL_TRIP_MAX_KM', 11))  # exclusive
    MEDIUM_TRIP_MAX_KM = float(os.environ.get('MEDIUM_TRIP_MAX_KM', 30))  # inclusive
