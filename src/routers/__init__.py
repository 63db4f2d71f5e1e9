from routers.shipping_routes import shipping_router
