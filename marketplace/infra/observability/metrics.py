from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed", ["status"])
order_items_per_order = Histogram(
    "marketplace_order_items_per_order",
    "Number of line items per created order",
    buckets=[1, 2, 3, 5, 10, 20, 50, float("inf")],
)
order_status_transitions_total = Counter(
    "marketplace_order_status_transitions_total",
    "Order status changes applied",
    ["from_status", "to_status", "role"],
)

# Authorization Metrics
order_authorization_denials_total = Counter(
    "marketplace_order_authorization_denials_total",
    "Order operations refused by the role rules",
    ["operation", "error"],
)

# Catalog Metrics
product_mutations_total = Counter(
    "marketplace_product_mutations_total", "Product create/update/delete operations", ["action", "status"]
)

# Unexpected failures caught at the service boundary
service_errors_total = Counter(
    "marketplace_service_errors_total", "Unexpected exceptions caught by services", ["service", "operation"]
)
