"""Hotel booking core: inventory, pricing, bookings and refunds."""
