"""GraphQL documents sent to the Shopify Storefront API."""

GET_SHOP = """
query getShop {
  shop {
    name
    description
  }
}
"""

GET_COLLECTION_PRODUCTS = """
query getCollectionProducts($handle: String!, $first: Int!) {
  collection(handle: $handle) {
    id
    title
    products(first: $first) {
      edges {
        node {
          id
          handle
          title
          featuredImage {
            url
            altText
            width
            height
          }
          priceRange {
            minVariantPrice {
              amount
              currencyCode
            }
          }
        }
      }
    }
  }
}
"""

GET_PRODUCT_BY_HANDLE = """
query getProductByHandle($handle: String!) {
  product(handle: $handle) {
    id
    title
    description
    handle
    featuredImage {
      url
      altText
      width
      height
    }
    images(first: 10) {
      edges {
        node {
          id
          url
          altText
          width
          height
        }
      }
    }
    options {
      id
      name
      values
    }
    variants(first: 100) {
      edges {
        node {
          id
          title
          availableForSale
          selectedOptions {
            name
            value
          }
          price {
            amount
            currencyCode
          }
          compareAtPrice {
            amount
            currencyCode
          }
          image {
            url
            altText
            width
            height
          }
        }
      }
    }
  }
}
"""

__all__ = ["GET_SHOP", "GET_COLLECTION_PRODUCTS", "GET_PRODUCT_BY_HANDLE"]
