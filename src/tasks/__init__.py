from tasks.shipment_tasks import cancel_shipment, create_shipment, track_shipment
