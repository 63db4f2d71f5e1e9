import os


def env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


RABBIT_URL = (
    "amqp://"
    + os.getenv("RABBITMQ_USER", "guest")
    + ":"
    + os.getenv("RABBITMQ_PASSWORD", "guest")
    + "@"
    + os.getenv("RABBITMQ_HOST", "localhost")
    + ":"
    + os.getenv("RABBITMQ_PORT", "5672")
)

SHIPMENT_EXCHANGE_NAME = os.getenv("SHIPMENT_EXCHANGE_NAME", "shipment.exchange")
SHIPMENT_QUEUE_NAME = os.getenv("SHIPMENT_QUEUE_NAME", "shipment.events")

# Active carrier when the caller does not name one ("none" disables shipping)
SHIPPING_DEFAULT_PROVIDER = os.getenv("SHIPPING_DEFAULT_PROVIDER", "none")

# Shipping cost rules (TRY)
SHIPPING_FLAT_RATE = float(os.getenv("SHIPPING_FLAT_RATE", 29.90))
SHIPPING_FREE_THRESHOLD = float(os.getenv("SHIPPING_FREE_THRESHOLD", 500))

# Seconds; applies to every carrier call unless the carrier overrides it
CARRIER_TIMEOUT = float(os.getenv("CARRIER_TIMEOUT", 20))

SHIPPING_SANDBOX_ENABLED = env_flag("SHIPPING_SANDBOX_ENABLED")

# Aras Kargo
ARAS_ENABLED = env_flag("ARAS_ENABLED")
ARAS_CUSTOMER_CODE = os.getenv("ARAS_CUSTOMER_CODE", "")
ARAS_USERNAME = os.getenv("ARAS_USERNAME", "")
ARAS_PASSWORD = os.getenv("ARAS_PASSWORD", "")
ARAS_CONFIGURATION_ID = os.getenv("ARAS_CONFIGURATION_ID", "")
ARAS_ORDER_WSDL = os.getenv(
    "ARAS_ORDER_WSDL",
    "https://customerws.araskargo.com.tr/ArasCargoCustomerIntegrationService/ArasCargoIntegrationService.svc?wsdl",
)
ARAS_TRACK_WSDL = os.getenv(
    "ARAS_TRACK_WSDL",
    "https://customerws.araskargo.com.tr/ArasCargoIntegrationService/ArasCargoIntegrationService.svc?wsdl",
)
ARAS_TRACKING_URL = os.getenv(
    "ARAS_TRACKING_URL", "https://kargotakip.araskargo.com.tr/mainpage.aspx?code="
)
ARAS_REQUIRE_SENDER_ADDRESS_ID = env_flag("ARAS_REQUIRE_SENDER_ADDRESS_ID")

# MNG Kargo
MNG_ENABLED = env_flag("MNG_ENABLED")
MNG_USERNAME = os.getenv("MNG_USERNAME", "")
MNG_PASSWORD = os.getenv("MNG_PASSWORD", "")
MNG_WSDL = os.getenv(
    "MNG_WSDL", "http://service.mngkargo.com.tr/kargoservice/mngkargo.asmx?wsdl"
)

# PTT Kargo
PTT_ENABLED = env_flag("PTT_ENABLED")
PTT_USERNAME = os.getenv("PTT_USERNAME", "")
PTT_PASSWORD = os.getenv("PTT_PASSWORD", "")
PTT_CUSTOMER_ID = os.getenv("PTT_CUSTOMER_ID", "")
PTT_ORDER_WSDL = os.getenv(
    "PTT_ORDER_WSDL", "https://pttws.ptt.gov.tr/PttKargoWS/PttKargoWS?wsdl"
)
PTT_TRACK_WSDL = os.getenv(
    "PTT_TRACK_WSDL", "https://pttws.ptt.gov.tr/GonderiTakip/GonderiTakipWS?wsdl"
)
PTT_TRACKING_URL = os.getenv("PTT_TRACKING_URL", "https://gonderitakip.ptt.gov.tr/?kod=")
# The PTT endpoints have historically been called without certificate checks
PTT_VERIFY_TLS = env_flag("PTT_VERIFY_TLS", "false")

# Yurtici Kargo
YURTICI_ENABLED = env_flag("YURTICI_ENABLED")
YURTICI_USERNAME = os.getenv("YURTICI_USERNAME", "")
YURTICI_PASSWORD = os.getenv("YURTICI_PASSWORD", "")
YURTICI_CUSTOMER_ID = os.getenv("YURTICI_CUSTOMER_ID", "")
YURTICI_ORDER_WSDL = os.getenv(
    "YURTICI_ORDER_WSDL",
    "http://webservices.yurticikargo.com:8080/ShippingOrderDispatcherServices/ShippingOrderDispatcherServices?wsdl",
)
YURTICI_TRACK_WSDL = os.getenv(
    "YURTICI_TRACK_WSDL",
    "http://webservices.yurticikargo.com:8080/KargoTakipServis/KargoTakipServices?wsdl",
)
YURTICI_TRACKING_URL = os.getenv(
    "YURTICI_TRACKING_URL",
    "https://www.yurticikargo.com/tr/online-servisler/gonderi-sorgula?code=",
)

# Navlungo
NAVLUNGO_ENABLED = env_flag("NAVLUNGO_ENABLED")
NAVLUNGO_API_URL = os.getenv("NAVLUNGO_API_URL", "https://api.navlungo.com")
NAVLUNGO_API_KEY = os.getenv("NAVLUNGO_API_KEY", "")
NAVLUNGO_API_SECRET = os.getenv("NAVLUNGO_API_SECRET", "")
NAVLUNGO_CARRIER_ID = os.getenv("NAVLUNGO_CARRIER_ID", "")
NAVLUNGO_TOKEN_REFRESH_MARGIN = int(os.getenv("NAVLUNGO_TOKEN_REFRESH_MARGIN", 300))
