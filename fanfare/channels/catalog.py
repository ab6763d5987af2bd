"""Per-notification-type lookup tables used by the channel senders.

Every table is a closed mapping over ``NotificationType``.  The unit
tests assert that each table covers every member, so adding a type
without filling these in fails loudly rather than silently.

Push and in-app messages are templates rendered by the same engine as
email and SMS bodies.
"""

from __future__ import annotations

from fanfare.models.events import NotificationType as T

# Template resource names for email (``email/<name>.html``) and SMS
# (``sms/<name>.txt``).
TEMPLATE_NAMES: dict[T, str] = {
    T.ORDER_CONFIRMATION: "order_confirmation",
    T.ORDER_SHIPPED: "order_shipped",
    T.ORDER_DELIVERED: "order_delivered",
    T.PAYMENT_RECEIVED: "payment_received",
    T.PAYMENT_FAILURE: "payment_failure",
    T.CART_ABANDONMENT: "cart_abandonment",
    T.CHECKOUT_EXPIRY: "checkout_expiry",
    T.WALLET_BALANCE_UPDATE: "wallet_balance_update",
    T.INSTALLMENT_DUE: "installment_due",
    T.SHOP_NEW_ORDER: "shop_new_order",
    T.SHOP_LOW_INVENTORY: "shop_low_inventory",
    T.GROUP_PURCHASE_COMPLETE: "group_purchase_complete",
    T.GROUP_PURCHASE_CREATED: "group_purchase_created",
    T.GROUP_MEMBER_JOINED: "group_member_joined",
    T.GROUP_SEATS_TRANSFERRED: "group_seats_transferred",
    T.WELCOME_EMAIL: "welcome_message",
    T.PROMOTIONAL_OFFER: "promotional_offer",
}

EMAIL_SUBJECTS: dict[T, str] = {
    T.ORDER_CONFIRMATION: "Order Confirmation",
    T.ORDER_SHIPPED: "Your Order Has Shipped",
    T.ORDER_DELIVERED: "Your Order Was Delivered",
    T.PAYMENT_RECEIVED: "Payment Received",
    T.PAYMENT_FAILURE: "Payment Failed",
    T.CART_ABANDONMENT: "You Left Something in Your Cart",
    T.CHECKOUT_EXPIRY: "Your Checkout Session Expired",
    T.WALLET_BALANCE_UPDATE: "Wallet Balance Updated",
    T.INSTALLMENT_DUE: "Installment Payment Due",
    T.SHOP_NEW_ORDER: "New Order Received",
    T.SHOP_LOW_INVENTORY: "Low Stock Alert",
    T.GROUP_PURCHASE_COMPLETE: "Group Purchase Complete",
    T.GROUP_PURCHASE_CREATED: "New Group Purchase Started",
    T.GROUP_MEMBER_JOINED: "A Member Joined Your Group",
    T.GROUP_SEATS_TRANSFERRED: "Group Seats Transferred",
    T.WELCOME_EMAIL: "Welcome!",
    T.PROMOTIONAL_OFFER: "A Special Offer for You",
}

PUSH_TITLES: dict[T, str] = {
    T.ORDER_CONFIRMATION: "Order Confirmed!",
    T.ORDER_SHIPPED: "Order Shipped!",
    T.ORDER_DELIVERED: "Order Delivered!",
    T.PAYMENT_RECEIVED: "Payment Received",
    T.PAYMENT_FAILURE: "Payment Failed",
    T.CART_ABANDONMENT: "Cart Reminder",
    T.CHECKOUT_EXPIRY: "Checkout Expired",
    T.WALLET_BALANCE_UPDATE: "Wallet Updated",
    T.INSTALLMENT_DUE: "Payment Due",
    T.SHOP_NEW_ORDER: "New Order!",
    T.SHOP_LOW_INVENTORY: "Low Stock Alert",
    T.GROUP_PURCHASE_COMPLETE: "Group Buy Success!",
    T.GROUP_PURCHASE_CREATED: "New Group Started!",
    T.GROUP_MEMBER_JOINED: "Member Joined Group!",
    T.GROUP_SEATS_TRANSFERRED: "Seats Transferred!",
    T.WELCOME_EMAIL: "Welcome!",
    T.PROMOTIONAL_OFFER: "Special Offer!",
}

# Push gateway priorities, 0 (lowest) to 10 (highest).
PUSH_PRIORITIES: dict[T, int] = {
    T.ORDER_CONFIRMATION: 10,
    T.ORDER_SHIPPED: 9,
    T.ORDER_DELIVERED: 9,
    T.PAYMENT_RECEIVED: 10,
    T.PAYMENT_FAILURE: 10,
    T.CART_ABANDONMENT: 3,
    T.CHECKOUT_EXPIRY: 3,
    T.WALLET_BALANCE_UPDATE: 9,
    T.INSTALLMENT_DUE: 10,
    T.SHOP_NEW_ORDER: 10,
    T.SHOP_LOW_INVENTORY: 10,
    T.GROUP_PURCHASE_COMPLETE: 9,
    T.GROUP_PURCHASE_CREATED: 4,
    T.GROUP_MEMBER_JOINED: 3,
    T.GROUP_SEATS_TRANSFERRED: 3,
    T.WELCOME_EMAIL: 4,
    T.PROMOTIONAL_OFFER: 3,
}

PUSH_MESSAGES: dict[T, str] = {
    T.ORDER_CONFIRMATION: (
        "Your order {{orderId}} has been confirmed! Total: {{payment.amount}}. "
        "We'll notify you when it ships."
    ),
    T.ORDER_SHIPPED: "Great news! Your order {{orderId}} has been shipped and is on its way!",
    T.ORDER_DELIVERED: "Your order {{orderId}} has been delivered! Enjoy your purchase!",
    T.PAYMENT_RECEIVED: "Payment of {{amount}} received successfully for order {{orderId}}.",
    T.PAYMENT_FAILURE: "Payment failed for order {{orderId}}. Please update your payment method.",
    T.CART_ABANDONMENT: (
        "You left items worth {{cart.total}} in your cart. Complete your purchase now!"
    ),
    T.CHECKOUT_EXPIRY: (
        "Your checkout session has expired. Please try again to complete your purchase."
    ),
    T.WALLET_BALANCE_UPDATE: (
        "Your wallet has been updated. New balance: {{wallet.currentBalance}}"
    ),
    T.INSTALLMENT_DUE: (
        "Installment payment of {{installment.amount}} is due on {{installment.dueDate}}."
    ),
    T.SHOP_NEW_ORDER: "New order {{orderId}} received from {{customer.name}}!",
    T.SHOP_LOW_INVENTORY: "Low stock alert! {{product.name}} inventory is running low.",
    T.GROUP_PURCHASE_COMPLETE: (
        "Group {{group.code}} is complete! {{product.name}} order created. "
        "You saved {{price.savings}}!"
    ),
    T.GROUP_PURCHASE_CREATED: (
        "New group purchase started! Group {{group.code}} for {{product.name}}. "
        "Progress: {{group.seatsOccupied}}/{{group.totalSeats}} seats filled."
    ),
    T.GROUP_MEMBER_JOINED: (
        "{{newMember.name}} joined group {{group.code}}! Progress: "
        "{{group.seatsOccupied}}/{{group.totalSeats}} seats. "
        "{{group.seatsRemaining}} remaining!"
    ),
    T.GROUP_SEATS_TRANSFERRED: (
        "Successfully transferred {{transfer.quantity}} seats from "
        "{{source.groupCode}} to {{target.groupCode}}!"
    ),
    T.WELCOME_EMAIL: (
        "Welcome, {{#if customer.name}}{{customer.name}}{{else}}there{{/if}}! "
        "Start shopping and discover amazing deals."
    ),
    T.PROMOTIONAL_OFFER: (
        "{{#if offer}}{{offer}}{{else}}Special offer{{/if}} available now! "
        "Don't miss out on exclusive deals."
    ),
}

IN_APP_TITLES: dict[T, str] = {
    T.ORDER_CONFIRMATION: "Order Confirmed",
    T.ORDER_SHIPPED: "Order Shipped",
    T.ORDER_DELIVERED: "Order Delivered",
    T.PAYMENT_RECEIVED: "Payment Received",
    T.PAYMENT_FAILURE: "Payment Failed",
    T.CART_ABANDONMENT: "Cart Reminder",
    T.CHECKOUT_EXPIRY: "Checkout Expired",
    T.WALLET_BALANCE_UPDATE: "Wallet Updated",
    T.INSTALLMENT_DUE: "Payment Due",
    T.SHOP_NEW_ORDER: "New Order",
    T.SHOP_LOW_INVENTORY: "Low Stock Alert",
    T.GROUP_PURCHASE_COMPLETE: "Group Buy Success",
    T.GROUP_PURCHASE_CREATED: "New Group Started",
    T.GROUP_MEMBER_JOINED: "Member Joined",
    T.GROUP_SEATS_TRANSFERRED: "Seats Transferred",
    T.WELCOME_EMAIL: "Welcome",
    T.PROMOTIONAL_OFFER: "Special Offer",
}

IN_APP_MESSAGES: dict[T, str] = {
    T.ORDER_CONFIRMATION: "Your order {{orderId}} has been confirmed",
    T.ORDER_SHIPPED: "Your order {{orderId}} has been shipped",
    T.ORDER_DELIVERED: "Your order {{orderId}} has been delivered",
    T.PAYMENT_RECEIVED: "Payment of {{amount}} received successfully",
    T.PAYMENT_FAILURE: "Payment failed for order {{orderId}}",
    T.CART_ABANDONMENT: "You left items in your cart",
    T.CHECKOUT_EXPIRY: "Your checkout session has expired",
    T.WALLET_BALANCE_UPDATE: "Your wallet balance is now {{wallet.currentBalance}}",
    T.INSTALLMENT_DUE: "Installment payment of {{installment.amount}} is due",
    T.SHOP_NEW_ORDER: "New order {{orderId}} received",
    T.SHOP_LOW_INVENTORY: "{{product.name}} inventory is running low",
    T.GROUP_PURCHASE_COMPLETE: (
        "Group {{group.code}} complete! Your {{product.name}} order has been created"
    ),
    T.GROUP_PURCHASE_CREATED: (
        "New group {{group.code}} started for {{product.name}} "
        "({{group.seatsOccupied}}/{{group.totalSeats}} seats)"
    ),
    T.GROUP_MEMBER_JOINED: (
        "{{newMember.name}} joined group {{group.code}}. "
        "{{group.seatsRemaining}} seats remaining"
    ),
    T.GROUP_SEATS_TRANSFERRED: (
        "{{transfer.quantity}} seats transferred to group {{target.groupCode}}"
    ),
    T.WELCOME_EMAIL: "Welcome, {{#if customer.name}}{{customer.name}}{{else}}there{{/if}}!",
    T.PROMOTIONAL_OFFER: "{{#if offer}}{{offer}}{{else}}Special offer{{/if}} available now",
}

IN_APP_PRIORITIES: dict[T, str] = {
    T.ORDER_CONFIRMATION: "NORMAL",
    T.ORDER_SHIPPED: "NORMAL",
    T.ORDER_DELIVERED: "NORMAL",
    T.PAYMENT_RECEIVED: "NORMAL",
    T.PAYMENT_FAILURE: "HIGH",
    T.CART_ABANDONMENT: "LOW",
    T.CHECKOUT_EXPIRY: "LOW",
    T.WALLET_BALANCE_UPDATE: "NORMAL",
    T.INSTALLMENT_DUE: "HIGH",
    T.SHOP_NEW_ORDER: "NORMAL",
    T.SHOP_LOW_INVENTORY: "HIGH",
    T.GROUP_PURCHASE_COMPLETE: "NORMAL",
    T.GROUP_PURCHASE_CREATED: "NORMAL",
    T.GROUP_MEMBER_JOINED: "LOW",
    T.GROUP_SEATS_TRANSFERRED: "LOW",
    T.WELCOME_EMAIL: "NORMAL",
    T.PROMOTIONAL_OFFER: "LOW",
}

# Business domain the parent service files an in-app notification under.
IN_APP_SERVICE_TYPES: dict[T, str] = {
    T.ORDER_CONFIRMATION: "ORDER",
    T.ORDER_SHIPPED: "ORDER",
    T.ORDER_DELIVERED: "ORDER",
    T.PAYMENT_RECEIVED: "PAYMENT",
    T.PAYMENT_FAILURE: "PAYMENT",
    T.CART_ABANDONMENT: "CART",
    T.CHECKOUT_EXPIRY: "CHECKOUT",
    T.WALLET_BALANCE_UPDATE: "WALLET",
    T.INSTALLMENT_DUE: "INSTALLMENT_AGREEMENT",
    T.SHOP_NEW_ORDER: "SHOP",
    T.SHOP_LOW_INVENTORY: "SHOP",
    T.GROUP_PURCHASE_COMPLETE: "GROUP_PURCHASE",
    T.GROUP_PURCHASE_CREATED: "GROUP_PURCHASE",
    T.GROUP_MEMBER_JOINED: "GROUP_PURCHASE",
    T.GROUP_SEATS_TRANSFERRED: "GROUP_PURCHASE",
    T.WELCOME_EMAIL: "USER_ACCOUNT",
    T.PROMOTIONAL_OFFER: "PROMOTIONAL",
}

ALL_TABLES: dict[str, dict[T, object]] = {
    "TEMPLATE_NAMES": TEMPLATE_NAMES,
    "EMAIL_SUBJECTS": EMAIL_SUBJECTS,
    "PUSH_TITLES": PUSH_TITLES,
    "PUSH_PRIORITIES": PUSH_PRIORITIES,
    "PUSH_MESSAGES": PUSH_MESSAGES,
    "IN_APP_TITLES": IN_APP_TITLES,
    "IN_APP_MESSAGES": IN_APP_MESSAGES,
    "IN_APP_PRIORITIES": IN_APP_PRIORITIES,
    "IN_APP_SERVICE_TYPES": IN_APP_SERVICE_TYPES,
}
