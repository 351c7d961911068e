"""
GraphQL operations sent to the Storefront API.
"""

PRODUCT_FRAGMENT = """
  fragment ProductFragment on Product {
    id
    title
    handle
    description
    images(first: 1) {
      nodes {
        url
        altText
      }
    }
    priceRange {
      minVariantPrice {
        amount
        currencyCode
      }
    }
    variants(first: 10) {
      nodes {
        id
        title
        availableForSale
        price {
          amount
          currencyCode
        }
      }
    }
    ingredients: metafield(namespace: "custom", key: "ingredients") { value }
    usage: metafield(namespace: "custom", key: "usage") { value }
    storage: metafield(namespace: "custom", key: "storage") { value }
    packaging: metafield(namespace: "custom", key: "packaging") { value }
    skinType: metafield(namespace: "custom", key: "skin_type") { value }
    weight: metafield(namespace: "custom", key: "weight") { value }
    volume: metafield(namespace: "custom", key: "volume") { value }
    badge: metafield(namespace: "custom", key: "badge") { value }
    category: metafield(namespace: "custom", key: "category") { value }
  }
"""

# Every cart operation selects the full cart so callers always receive the
# complete authoritative line set.
CART_FRAGMENT = """
  fragment CartFragment on Cart {
    id
    checkoutUrl
    lines(first: 50) {
      nodes {
        id
        quantity
        merchandise {
          ... on ProductVariant {
            id
            title
            price { amount currencyCode }
            product {
              id
              title
              handle
              images(first: 1) { nodes { url altText } }
            }
          }
        }
      }
    }
  }
"""

PRODUCTS_QUERY = (
    PRODUCT_FRAGMENT
    + """
  query GetProducts($query: String, $first: Int!) {
    products(first: $first, query: $query) {
      nodes { ...ProductFragment }
    }
  }
"""
)

PRODUCT_BY_ID_QUERY = (
    PRODUCT_FRAGMENT
    + """
  query GetProduct($id: ID!) {
    product(id: $id) { ...ProductFragment }
  }
"""
)

PRODUCT_BY_HANDLE_QUERY = (
    PRODUCT_FRAGMENT
    + """
  query GetProductByHandle($handle: String!) {
    product(handle: $handle) { ...ProductFragment }
  }
"""
)

CART_QUERY = (
    CART_FRAGMENT
    + """
  query GetCart($cartId: ID!) {
    cart(id: $cartId) { ...CartFragment }
  }
"""
)

CART_CREATE_MUTATION = (
    CART_FRAGMENT
    + """
  mutation CartCreate($input: CartInput!) {
    cartCreate(input: $input) {
      cart { ...CartFragment }
      userErrors { field message }
    }
  }
"""
)

CART_LINES_ADD_MUTATION = (
    CART_FRAGMENT
    + """
  mutation CartLinesAdd($cartId: ID!, $lines: [CartLineInput!]!) {
    cartLinesAdd(cartId: $cartId, lines: $lines) {
      cart { ...CartFragment }
      userErrors { field message }
    }
  }
"""
)

CART_LINES_UPDATE_MUTATION = (
    CART_FRAGMENT
    + """
  mutation CartLinesUpdate($cartId: ID!, $lines: [CartLineUpdateInput!]!) {
    cartLinesUpdate(cartId: $cartId, lines: $lines) {
      cart { ...CartFragment }
      userErrors { field message }
    }
  }
"""
)

CART_LINES_REMOVE_MUTATION = (
    CART_FRAGMENT
    + """
  mutation CartLinesRemove($cartId: ID!, $lineIds: [ID!]!) {
    cartLinesRemove(cartId: $cartId, lineIds: $lineIds) {
      cart { ...CartFragment }
      userErrors { field message }
    }
  }
"""
)

CART_BUYER_IDENTITY_MUTATION = """
  mutation CartBuyerIdentityUpdate(
    $cartId: ID!
    $buyerIdentity: CartBuyerIdentityInput!
  ) {
    cartBuyerIdentityUpdate(cartId: $cartId, buyerIdentity: $buyerIdentity) {
      cart { id }
      userErrors { field message }
    }
  }
"""

# --- Customer accounts ---

CUSTOMER_ACCESS_TOKEN_CREATE_MUTATION = """
  mutation CustomerAccessTokenCreate($input: CustomerAccessTokenCreateInput!) {
    customerAccessTokenCreate(input: $input) {
      customerAccessToken { accessToken expiresAt }
      customerUserErrors { code field message }
    }
  }
"""

CUSTOMER_CREATE_MUTATION = """
  mutation CustomerCreate($input: CustomerCreateInput!) {
    customerCreate(input: $input) {
      customer { id }
      customerUserErrors { code field message }
    }
  }
"""

CUSTOMER_QUERY = """
  query GetCustomer($accessToken: String!) {
    customer(customerAccessToken: $accessToken) {
      id
      firstName
      lastName
      email
    }
  }
"""

CUSTOMER_ACCESS_TOKEN_DELETE_MUTATION = """
  mutation CustomerAccessTokenDelete($customerAccessToken: String!) {
    customerAccessTokenDelete(customerAccessToken: $customerAccessToken) {
      deletedAccessToken
      userErrors { field message }
    }
  }
"""
