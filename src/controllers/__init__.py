from controllers.shipping_controller import (
    calculate_cost,
    calculate_desi,
    cancel_shipment,
    create_shipment,
    get_label,
    list_providers,
    track_shipment,
)
