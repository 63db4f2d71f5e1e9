from publishers.shipment_publisher import publish_shipment_event
