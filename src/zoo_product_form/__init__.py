"""zoo-product-form: service catalog mirrored into Shopify Metaobjects."""
