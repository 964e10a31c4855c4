"""The order service: order creation, lookup and updates."""