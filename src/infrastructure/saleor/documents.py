"""GraphQL documents sent to Saleor."""

FETCH_APP_PRIVATE_METADATA = """
query FetchAppPrivateMetadata {
  app {
    id
    privateMetadata {
      key
      value
    }
  }
}
"""

FETCH_OWN_WEBHOOKS = """
query FetchOwnWebhooks($id: ID!) {
  app(id: $id) {
    webhooks {
      id
      name
      isActive
      asyncEvents {
        eventType
      }
      syncEvents {
        eventType
      }
    }
  }
}
"""

DISABLE_WEBHOOK = """
mutation DisableWebhook($id: ID!) {
  webhookUpdate(id: $id, input: { isActive: false }) {
    webhook {
      id
      isActive
    }
    errors {
      field
      message
    }
  }
}
"""

FETCH_PRODUCTS = """
query FetchProducts($first: Int!, $after: String) {
  products(first: $first, after: $after) {
    pageInfo {
      hasNextPage
      endCursor
    }
    edges {
      node {
        id
        name
        slug
        description
        seoTitle
        seoDescription
        category {
          id
          name
          slug
        }
        thumbnail {
          url
        }
        variants {
          id
          name
          sku
          quantityAvailable
          channelListings {
            channel {
              slug
              currencyCode
            }
            price {
              amount
              currency
            }
          }
        }
      }
    }
  }
}
"""
