"""GraphQL documents sent to the Unraid API"""

CONTAINER_FIELDS = """
    id
    names
    image
    state
    status
    ports {
      ip
      privatePort
      publicPort
      type
    }
"""

LIST_CONTAINERS = """
query GetDockerContainers {
  docker {
    containers {%s}
  }
}
""" % CONTAINER_FIELDS

START_CONTAINER = """
mutation StartContainer($id: PrefixedID!) {
  docker {
    start(id: $id) {%s}
  }
}
""" % CONTAINER_FIELDS

STOP_CONTAINER = """
mutation StopContainer($id: PrefixedID!) {
  docker {
    stop(id: $id) {%s}
  }
}
""" % CONTAINER_FIELDS

UPDATE_CONTAINER = """
mutation UpdateContainer($id: PrefixedID!) {
  docker {
    updateContainer(id: $id) {%s}
  }
}
""" % CONTAINER_FIELDS
