"""Canonical GraphQL query/mutation strings for Shopify Admin API."""

# Metaobject definition bootstrap
QUERY_METAOBJECT_DEFINITIONS = """
query MetaobjectDefinitions($first: Int!) {
  metaobjectDefinitions(first: $first) {
    edges {
      node {
        id
        type
        name
      }
    }
  }
}
"""

MUTATION_METAOBJECT_DEFINITION_CREATE = """
mutation CreateMetaobjectDefinition($definition: MetaobjectDefinitionCreateInput!) {
  metaobjectDefinitionCreate(definition: $definition) {
    metaobjectDefinition {
      id
      type
      name
    }
    userErrors { field message }
  }
}
"""

# Metaobject instance sync
MUTATION_METAOBJECT_UPSERT = """
mutation MetaobjectUpsert($handle: MetaobjectHandleInput!, $metaobject: MetaobjectUpsertInput!) {
  metaobjectUpsert(handle: $handle, metaobject: $metaobject) {
    metaobject {
      id
      handle
    }
    userErrors { field message }
  }
}
"""

MUTATION_METAOBJECT_DELETE = """
mutation MetaobjectDelete($id: ID!) {
  metaobjectDelete(id: $id) {
    deletedId
    userErrors { field message }
  }
}
"""

# Product editor
QUERY_PRODUCT_TITLE = """
query ProductTitle($id: ID!) {
  product(id: $id) {
    id
    title
  }
}
"""

MUTATION_PRODUCT_TITLE_UPDATE = """
mutation ProductTitleUpdate($input: ProductInput!) {
  productUpdate(input: $input) {
    product { id title }
    userErrors { field message }
  }
}
"""
