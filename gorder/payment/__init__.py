"""The payment service: payment links for newly created orders."""