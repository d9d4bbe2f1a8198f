"""Test fixtures for restfulgen tests.

This module provides sample OpenAPI documents used across the test suite.
"""

# Minimal OpenAPI 3.0 spec for basic testing
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# One schema and one GET operation with a path parameter
GET_PET_SPEC = {
    'openapi': '3.0.3',
    'info': {'title': 'Get Pet API', 'version': '1.0.0'},
    'paths': {
        '/pets/{id}': {
            'get': {
                'operationId': 'getPet',
                'summary': 'Find a pet',
                'parameters': [
                    {
                        'name': 'id',
                        'in': 'path',
                        'required': True,
                        'schema': {'type': 'integer', 'format': 'int64'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'The pet',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    'default': {
                        'description': 'Unexpected error',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Error'}
                            }
                        },
                    },
                },
            }
        }
    },
    'components': {
        'schemas': {
            'Pet': {
                'type': 'object',
                'required': ['id'],
                'properties': {
                    'id': {'type': 'integer'},
                    'name': {'type': 'string'},
                },
            },
            'Error': {
                'type': 'object',
                'required': ['code', 'message'],
                'properties': {
                    'code': {'type': 'integer', 'format': 'int32'},
                    'message': {'type': 'string'},
                },
            },
        }
    },
}

# Pet store with list, create, read and delete operations
PETSTORE_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Swagger Petstore', 'version': '1.0.0'},
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'summary': 'List all pets',
                'parameters': [
                    {
                        'name': 'limit',
                        'in': 'query',
                        'description': 'How many items to return at one time',
                        'required': False,
                        'schema': {'type': 'integer', 'format': 'int32'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'A paged array of pets',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pets'}
                            }
                        },
                    },
                    'default': {
                        'description': 'Unexpected error',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Error'}
                            }
                        },
                    },
                },
            },
            'post': {
                'operationId': 'createPet',
                'summary': 'Create a pet',
                'requestBody': {
                    'required': True,
                    'content': {
                        'application/json': {
                            'schema': {'$ref': '#/components/schemas/NewPet'}
                        }
                    },
                },
                'responses': {
                    '201': {
                        'description': 'The created pet',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    'default': {'$ref': '#/components/responses/GenericError'},
                },
            },
        },
        '/pets/{id}': {
            'parameters': [
                {
                    'name': 'id',
                    'in': 'path',
                    'required': True,
                    'schema': {'type': 'integer', 'format': 'int64'},
                }
            ],
            'get': {
                'operationId': 'getPet',
                'summary': 'Find a pet',
                'description': 'Returns a single pet by its id.',
                'responses': {
                    '200': {
                        'description': 'The pet',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Pet'}
                            }
                        },
                    },
                    'default': {'$ref': '#/components/responses/GenericError'},
                },
            },
            'delete': {
                'operationId': 'deletePet',
                'responses': {
                    '204': {'description': 'Pet deleted'},
                    'default': {'$ref': '#/components/responses/GenericError'},
                },
            },
        },
    },
    'components': {
        'schemas': {
            'Pet': {
                'type': 'object',
                'required': ['id'],
                'properties': {
                    'id': {'type': 'integer', 'format': 'int64'},
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                },
            },
            'NewPet': {
                'type': 'object',
                'required': ['name'],
                'properties': {
                    'name': {'type': 'string'},
                    'tag': {'type': 'string'},
                },
            },
            'Pets': {'type': 'array', 'items': {'$ref': '#/components/schemas/Pet'}},
            'Error': {
                'type': 'object',
                'required': ['code', 'message'],
                'properties': {
                    'code': {'type': 'integer', 'format': 'int32'},
                    'message': {'type': 'string'},
                },
            },
        },
        'responses': {
            'GenericError': {
                'description': 'Unexpected error',
                'content': {
                    'application/json': {
                        'schema': {'$ref': '#/components/schemas/Error'}
                    }
                },
            }
        },
    },
}

# Parameters declared through $ref, on the path item, and a prefer header
PARAMETERS_SPEC = {
    'openapi': '3.0.1',
    'info': {'title': 'Jobs API', 'version': '1.0.0'},
    'paths': {
        '/tenants/{tenantId}/jobs/{jobId}': {
            'parameters': [{'$ref': '#/components/parameters/TenantId'}],
            'get': {
                'operationId': 'getJob',
                'summary': 'Get a job',
                'parameters': [
                    {'name': 'jobId', 'in': 'path', 'required': True, 'schema': {'type': 'string'}},
                    {'name': 'verbose', 'in': 'query', 'schema': {'type': 'boolean'}},
                    {'name': 'Prefer', 'in': 'header', 'schema': {'type': 'string'}},
                    {'name': 'session', 'in': 'cookie', 'schema': {'type': 'string'}},
                ],
                'responses': {
                    '200': {
                        'description': 'The job',
                        'content': {
                            'application/json': {
                                'schema': {
                                    'type': 'object',
                                    'properties': {
                                        'id': {'type': 'string'},
                                        'state': {
                                            'type': 'string',
                                            'enum': ['queued', 'running', 'done'],
                                        },
                                    },
                                }
                            }
                        },
                    }
                },
            },
        }
    },
    'components': {
        'parameters': {
            'TenantId': {
                'name': 'tenantId',
                'in': 'path',
                'required': True,
                'schema': {'type': 'string', 'format': 'uuid'},
            }
        }
    },
}

# Two operations sharing the same operationId
DUPLICATE_OPERATION_ID_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Duplicated API', 'version': '1.0.0'},
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'responses': {'200': {'description': 'ok'}},
            }
        },
        '/animals': {
            'get': {
                'operationId': 'listPets',
                'responses': {'200': {'description': 'ok'}},
            }
        },
    },
}

# Swagger 2.0 version of a small pet store
SWAGGER_SPEC = {
    'swagger': '2.0',
    'info': {'title': 'Swagger Petstore', 'version': '1.0.0'},
    'host': 'petstore.example.com',
    'basePath': '/v1',
    'schemes': ['https'],
    'consumes': ['application/json'],
    'produces': ['application/json'],
    'paths': {
        '/pets': {
            'get': {
                'operationId': 'listPets',
                'parameters': [
                    {'name': 'limit', 'in': 'query', 'type': 'integer', 'format': 'int32'}
                ],
                'responses': {
                    '200': {
                        'description': 'A list of pets',
                        'schema': {
                            'type': 'array',
                            'items': {'$ref': '#/definitions/Pet'},
                        },
                    }
                },
            },
            'post': {
                'operationId': 'createPet',
                'parameters': [
                    {
                        'name': 'pet',
                        'in': 'body',
                        'required': True,
                        'schema': {'$ref': '#/definitions/Pet'},
                    }
                ],
                'responses': {'201': {'description': 'Created'}},
            },
        },
        '/pets/{petId}/photo': {
            'post': {
                'operationId': 'uploadPhoto',
                'consumes': ['multipart/form-data'],
                'parameters': [
                    {'$ref': '#/parameters/PetId'},
                    {'name': 'file', 'in': 'formData', 'type': 'file', 'required': True},
                    {'name': 'caption', 'in': 'formData', 'type': 'string'},
                ],
                'responses': {'200': {'$ref': '#/responses/Ok'}},
            }
        },
    },
    'parameters': {
        'PetId': {'name': 'petId', 'in': 'path', 'required': True, 'type': 'string'}
    },
    'responses': {'Ok': {'description': 'Ok'}},
    'definitions': {
        'Pet': {
            'type': 'object',
            'required': ['name'],
            'properties': {
                'name': {'type': 'string'},
                'owner': {'$ref': '#/definitions/Owner'},
            },
        },
        'Owner': {'type': 'object', 'properties': {'name': {'type': 'string'}}},
    },
}
