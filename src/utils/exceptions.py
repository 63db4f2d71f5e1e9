class CarrierError(Exception):
    """Base error raised inside a carrier driver.

    Drivers never let these escape; the provider boundary turns them into
    typed results.
    """

    response_code = 503


class CarrierConfigError(CarrierError):
    """Credentials, WSDL or API URL missing for a carrier."""


class CarrierTransportError(CarrierError):
    """Connection refused, timeout or an unreadable carrier response."""


class SoapFault(CarrierTransportError):
    def __init__(self, fault_code: str, fault_string: str):
        self.fault_code = fault_code
        self.fault_string = fault_string
        super().__init__(f"SOAP fault {fault_code}: {fault_string}")
