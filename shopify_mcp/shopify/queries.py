"""
GraphQL documents for the Shopify Admin API.

Fragments are appended after the operation that uses them so the first
``query``/``mutation`` keyword in each document names the operation.
"""

USER_ERRORS = """
          userErrors {
            field
            message
          }"""

PRODUCT_IMAGES_FRAGMENT = """
fragment ProductImages on Image {
  id
  src
  altText
  height
  width
}
"""

PRODUCT_VARIANTS_FRAGMENT = """
fragment ProductVariants on ProductVariant {
  id
  title
  price
  compareAtPrice
  sku
  inventoryQuantity
  image {
    ...ProductImages
  }
  availableForSale
  inventoryPolicy
  selectedOptions {
    name
    value
  }
}
"""

PRODUCT_FRAGMENT = """
fragment Product on Product {
  id
  handle
  title
  description
  status
  vendor
  productType
  tags
  publishedAt
  updatedAt
  options {
    id
    name
    values
  }
  images(first: 20) {
    edges {
      node {
        ...ProductImages
      }
    }
  }
  variants(first: 250) {
    edges {
      node {
        ...ProductVariants
      }
    }
  }
}
""" + PRODUCT_IMAGES_FRAGMENT + PRODUCT_VARIANTS_FRAGMENT

# ============== Products ==============

GET_PRODUCTS = """
query getProducts($query: String, $first: Int, $after: String) {
  products(query: $query, first: $first, after: $after) {
    edges {
      node {
        ...Product
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
  shop {
    currencyCode
  }
}
""" + PRODUCT_FRAGMENT

GET_COLLECTION_PRODUCTS = """
query getCollectionProducts($id: ID!, $first: Int, $after: String) {
  collection(id: $id) {
    id
    title
    products(first: $first, after: $after) {
      edges {
        node {
          ...Product
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
  shop {
    currencyCode
  }
}
""" + PRODUCT_FRAGMENT

GET_PRODUCT = """
query getProduct($id: ID!) {
  product(id: $id) {
    ...Product
  }
  shop {
    currencyCode
  }
}
""" + PRODUCT_FRAGMENT

PRODUCT_CREATE = """
mutation productCreate($input: ProductInput!) {
  productCreate(input: $input) {
    product {
      ...Product
    }""" + USER_ERRORS + """
  }
}
""" + PRODUCT_FRAGMENT

PRODUCT_UPDATE = """
mutation productUpdate($input: ProductInput!) {
  productUpdate(input: $input) {
    product {
      ...Product
    }""" + USER_ERRORS + """
  }
}
""" + PRODUCT_FRAGMENT

PRODUCT_VARIANTS_BULK_UPDATE = """
mutation productVariantsBulkUpdate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkUpdate(productId: $productId, variants: $variants) {
    productVariants {
      id
      title
      price
    }""" + USER_ERRORS + """
  }
}
"""

PRODUCT_VARIANTS_BULK_CREATE = """
mutation productVariantsBulkCreate($productId: ID!, $variants: [ProductVariantsBulkInput!]!) {
  productVariantsBulkCreate(productId: $productId, variants: $variants) {
    productVariants {
      id
      title
      price
    }""" + USER_ERRORS + """
  }
}
"""

PRODUCT_VARIANTS_BULK_DELETE = """
mutation productVariantsBulkDelete($productId: ID!, $variantsIds: [ID!]!) {
  productVariantsBulkDelete(productId: $productId, variantsIds: $variantsIds) {
    product {
      id
    }""" + USER_ERRORS + """
  }
}
"""

# ============== Inventory ==============

GET_VARIANT_INVENTORY = """
query getVariantInventory($id: ID!) {
  productVariant(id: $id) {
    id
    inventoryItem {
      id
      inventoryLevels(first: 10) {
        edges {
          node {
            location {
              id
            }
            quantities(names: ["available"]) {
              name
              quantity
            }
          }
        }
      }
    }
  }
}
"""

INVENTORY_ADJUST_QUANTITIES = """
mutation inventoryAdjustQuantities($input: InventoryAdjustQuantitiesInput!) {
  inventoryAdjustQuantities(input: $input) {
    inventoryAdjustmentGroup {
      reason
      changes {
        name
        delta
      }
    }""" + USER_ERRORS + """
  }
}
"""

INVENTORY_SET_QUANTITIES = """
mutation inventorySetQuantities($input: InventorySetQuantitiesInput!) {
  inventorySetQuantities(input: $input) {
    inventoryAdjustmentGroup {
      reason
      changes {
        name
        delta
      }
    }""" + USER_ERRORS + """
  }
}
"""

# ============== Metafields ==============

METAFIELDS_SET = """
mutation metafieldsSet($metafields: [MetafieldsSetInput!]!) {
  metafieldsSet(metafields: $metafields) {
    metafields {
      id
      namespace
      key
      value
      type
    }""" + USER_ERRORS + """
  }
}
"""

GET_PRODUCT_METAFIELD = """
query getProductMetafield($id: ID!, $namespace: String!, $key: String!) {
  product(id: $id) {
    id
    metafield(namespace: $namespace, key: $key) {
      id
    }
  }
}
"""

METAFIELD_DELETE = """
mutation metafieldDelete($input: MetafieldDeleteInput!) {
  metafieldDelete(input: $input) {
    deletedId""" + USER_ERRORS + """
  }
}
"""

# ============== Collection membership ==============

COLLECTION_ADD_PRODUCTS = """
mutation collectionAddProducts($id: ID!, $productIds: [ID!]!) {
  collectionAddProducts(id: $id, productIds: $productIds) {
    collection {
      id
      title
    }""" + USER_ERRORS + """
  }
}
"""

COLLECTION_REMOVE_PRODUCTS = """
mutation collectionRemoveProducts($id: ID!, $productIds: [ID!]!) {
  collectionRemoveProducts(id: $id, productIds: $productIds) {
    job {
      id
      done
    }""" + USER_ERRORS + """
  }
}
"""

# ============== Product media ==============

MEDIA_USER_ERRORS = """
          mediaUserErrors {
            field
            message
          }"""

PRODUCT_CREATE_MEDIA = """
mutation productCreateMedia($productId: ID!, $media: [CreateMediaInput!]!) {
  productCreateMedia(productId: $productId, media: $media) {
    media {
      id
      alt
      status
      mediaContentType
    }""" + MEDIA_USER_ERRORS + """
  }
}
"""

PRODUCT_UPDATE_MEDIA = """
mutation productUpdateMedia($productId: ID!, $media: [UpdateMediaInput!]!) {
  productUpdateMedia(productId: $productId, media: $media) {
    media {
      id
      alt
      status
      mediaContentType
    }""" + MEDIA_USER_ERRORS + """
  }
}
"""

PRODUCT_DELETE_MEDIA = """
mutation productDeleteMedia($productId: ID!, $mediaIds: [ID!]!) {
  productDeleteMedia(productId: $productId, mediaIds: $mediaIds) {
    deletedMediaIds""" + MEDIA_USER_ERRORS + """
  }
}
"""

# ============== Customers ==============

GET_CUSTOMERS = """
query getCustomers($first: Int, $after: String) {
  customers(first: $first, after: $after) {
    edges {
      node {
        id
        email
        firstName
        lastName
        phone
        ordersCount
        tags
        defaultAddress {
          countryCodeV2
        }
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""

CUSTOMER_UPDATE_TAGS = """
mutation customerUpdate($input: CustomerInput!) {
  customerUpdate(input: $input) {
    customer {
      id
      tags
    }""" + USER_ERRORS + """
  }
}
"""

# ============== Orders ==============

GET_ORDERS = """
query getOrders($first: Int, $after: String, $query: String, $sortKey: OrderSortKeys, $reverse: Boolean) {
  orders(first: $first, after: $after, query: $query, sortKey: $sortKey, reverse: $reverse) {
    edges {
      node {
        id
        name
        createdAt
        displayFinancialStatus
        displayFulfillmentStatus
        email
        note
        tags
        totalPriceSet {
          shopMoney {
            amount
            currencyCode
          }
          presentmentMoney {
            amount
            currencyCode
          }
        }
        customer {
          id
          email
        }
        shippingAddress {
          address1
          address2
          city
          province
          country
          zip
          firstName
          lastName
          phone
        }
        lineItems(first: 10) {
          nodes {
            id
            title
            quantity
            originalTotalSet {
              shopMoney {
                amount
                currencyCode
              }
            }
            variant {
              id
              title
              sku
              price
            }
          }
        }
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""

DRAFT_ORDER_CREATE = """
mutation draftOrderCreate($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder {
      id
      name
      status
      invoiceUrl
      totalPriceSet {
        shopMoney {
          amount
          currencyCode
        }
      }
    }""" + USER_ERRORS + """
  }
}
"""

GET_DRAFT_ORDER = """
query getDraftOrder($id: ID!) {
  draftOrder(id: $id) {
    id
    name
    status
    lineItems(first: 100) {
      nodes {
        id
        quantity
        variant {
          id
        }
      }
    }
  }
}
"""

DRAFT_ORDER_COMPLETE = """
mutation draftOrderComplete($id: ID!, $paymentPending: Boolean) {
  draftOrderComplete(id: $id, paymentPending: $paymentPending) {
    draftOrder {
      id
      name
      status
      order {
        id
        name
      }
    }""" + USER_ERRORS + """
  }
}
"""

# ============== Collections ==============

GET_COLLECTIONS = """
query getCollections($first: Int, $after: String, $query: String) {
  collections(first: $first, after: $after, query: $query) {
    edges {
      node {
        id
        handle
        title
        description
        productsCount
        updatedAt
        image {
          src
          width
          height
          altText
        }
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""

# ============== Shop ==============

GET_SHOP = """
query getShop {
  shop {
    id
    name
    email
    myshopifyDomain
    currencyCode
    primaryDomain {
      url
      host
    }
  }
}
"""

GET_SHOP_DETAILS = """
query getShopDetails {
  shop {
    id
    name
    email
    myshopifyDomain
    plan {
      displayName
      partnerDevelopment
      shopifyPlus
    }
    ianaTimezone
    currencyCode
    weightUnit
    billingAddress {
      address1
      address2
      city
      zip
      country
      countryCodeV2
      province
      provinceCode
      phone
    }
    primaryDomain {
      url
      host
    }
    shipsToCountries
  }
}
"""

# ============== Discounts ==============

DISCOUNT_CODE_BASIC_CREATE = """
mutation discountCodeBasicCreate($basicCodeDiscount: DiscountCodeBasicInput!) {
  discountCodeBasicCreate(basicCodeDiscount: $basicCodeDiscount) {
    codeDiscountNode {
      id
      codeDiscount {
        ... on DiscountCodeBasic {
          title
          status
          startsAt
          endsAt
          codes(first: 1) {
            nodes {
              code
            }
          }
        }
      }
    }""" + USER_ERRORS + """
  }
}
"""

GET_DISCOUNT_BY_CODE = """
query getDiscountByCode($code: String!) {
  codeDiscountNodeByCode(code: $code) {
    id
    codeDiscount {
      ... on DiscountCodeBasic {
        title
        status
        startsAt
        endsAt
        appliesOncePerCustomer
        asyncUsageCount
        codes(first: 10) {
          nodes {
            code
          }
        }
        customerGets {
          value {
            ... on DiscountPercentage {
              percentage
            }
            ... on DiscountAmount {
              amount {
                amount
                currencyCode
              }
              appliesOnEachItem
            }
          }
        }
      }
    }
  }
}
"""

# ============== Blog articles ==============

ARTICLE_FIELDS = """
    id
    title
    author {
      name
    }
    bodyHtml
    publishedAt
    tags
    status
    image {
      src
      altText
    }
"""

GET_ARTICLES = """
query getBlogArticles($first: Int, $after: String, $query: String) {
  articles(first: $first, after: $after, query: $query) {
    edges {
      node {""" + ARTICLE_FIELDS + """
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""

GET_ARTICLE = """
query getBlogArticle($id: ID!) {
  article(id: $id) {""" + ARTICLE_FIELDS + """
  }
}
"""

ARTICLE_CREATE = """
mutation createArticle($input: ArticleInput!) {
  articleCreate(input: $input) {
    article {
      id
      title
      status
    }""" + USER_ERRORS + """
  }
}
"""

ARTICLE_UPDATE = """
mutation updateArticle($id: ID!, $input: ArticleInput!) {
  articleUpdate(id: $id, input: $input) {
    article {
      id
      title
      status
    }""" + USER_ERRORS + """
  }
}
"""

ARTICLE_DELETE = """
mutation deleteArticle($id: ID!) {
  articleDelete(id: $id) {
    deletedArticleId""" + USER_ERRORS + """
  }
}
"""

# ============== Webhooks ==============

WEBHOOK_SUBSCRIPTION_CREATE = """
mutation webhookSubscriptionCreate($topic: WebhookSubscriptionTopic!, $webhookSubscription: WebhookSubscriptionInput!) {
  webhookSubscriptionCreate(topic: $topic, webhookSubscription: $webhookSubscription) {
    webhookSubscription {
      id
      topic
      callbackUrl
    }""" + USER_ERRORS + """
  }
}
"""

GET_WEBHOOKS = """
query getWebhooks($first: Int!) {
  webhookSubscriptions(first: $first) {
    edges {
      node {
        id
        topic
        callbackUrl
      }
    }
  }
}
"""

WEBHOOK_SUBSCRIPTION_DELETE = """
mutation webhookSubscriptionDelete($id: ID!) {
  webhookSubscriptionDelete(id: $id) {
    deletedWebhookSubscriptionId""" + USER_ERRORS + """
  }
}
"""
