"""End-to-end tests for generating bindings from whole documents."""

import copy
import json
from unittest.mock import MagicMock

import pytest

from restfulgen.codegen.codegen import Codegen, generate_bindings, generate_source
from restfulgen.codegen.emitter import CodeEmitter
from restfulgen.codegen.endpoints import EndpointFactory
from restfulgen.codegen.schema import SchemaLoader, SchemaResolver
from restfulgen.codegen.types import TypeGenerator
from restfulgen.config import DocumentConfig
from restfulgen.exceptions import (
    DuplicateOperationId,
    MissingItemsSchema,
    UnsupportedDocumentVersion,
    UnsupportedReference,
)
from restfulgen.openapi import OpenAPI

from .fixtures import (
    DUPLICATE_OPERATION_ID_SPEC,
    GET_PET_SPEC,
    MINIMAL_OPENAPI_SPEC,
    PARAMETERS_SPEC,
    PETSTORE_SPEC,
    SWAGGER_SPEC,
)

PETSTORE_OUTPUT = '''/* Generated by restful-react */

import qs from "qs";
import React from "react";
import { Get, GetProps, useGet, UseGetProps, Mutate, MutateProps, useMutate, UseMutateProps, Poll, PollProps } from "restful-react";

export type Omit<T, K extends keyof T> = Pick<T, Exclude<keyof T, K>>;

export interface Pet {id: number; name?: string; tag?: string}

export interface NewPet {name: string; tag?: string}

export type Pets = Pet[];

export interface Error {code: number; message: string}

export type GenericErrorResponse = Error;

export type ListPetsProps = Omit<GetProps<Pets, Error>, "path"> & {/** How many items to return at one time */ limit?: number};

/**
 * List all pets
 */
export const ListPets = ({limit, ...props}: ListPetsProps) => (
  <Get<Pets, Error>
    path={`/pets?${qs.stringify({limit})}`}
    {...props}
  />
);

export type UseListPetsProps = Omit<UseGetProps<Pets, Error>, "path"> & {/** How many items to return at one time */ limit?: number};

/**
 * List all pets
 */
export const useListPets = ({limit, ...props}: UseListPetsProps) => useGet<Pets, Error>(`/pets?${qs.stringify({limit})}`, props);

export type CreatePetProps = Omit<MutateProps<Pet, GenericErrorResponse, NewPet>, "path" | "verb">;

/**
 * Create a pet
 */
export const CreatePet = ({...props}: CreatePetProps) => (
  <Mutate<Pet, GenericErrorResponse, NewPet>
    verb="POST"
    path={`/pets`}
    {...props}
  />
);

export type UseCreatePetProps = Omit<UseMutateProps<Pet, GenericErrorResponse, NewPet>, "path" | "verb">;

/**
 * Create a pet
 */
export const useCreatePet = ({...props}: UseCreatePetProps) => useMutate<Pet, GenericErrorResponse, NewPet>("POST", `/pets`, props);

export type GetPetProps = Omit<GetProps<Pet, GenericErrorResponse>, "path"> & {id: number};

/**
 * Find a pet
 *
 * Returns a single pet by its id.
 */
export const GetPet = ({id, ...props}: GetPetProps) => (
  <Get<Pet, GenericErrorResponse>
    path={`/pets/${id}`}
    {...props}
  />
);

export type UseGetPetProps = Omit<UseGetProps<Pet, GenericErrorResponse>, "path"> & {id: number};

/**
 * Find a pet
 *
 * Returns a single pet by its id.
 */
export const useGetPet = ({id, ...props}: UseGetPetProps) => useGet<Pet, GenericErrorResponse>(`/pets/${id}`, props);

export type DeletePetProps = Omit<MutateProps<void, GenericErrorResponse, number>, "path" | "verb">;

export const DeletePet = ({...props}: DeletePetProps) => (
  <Mutate<void, GenericErrorResponse, number>
    verb="DELETE"
    path={`/pets`}
    {...props}
  />
);

export type UseDeletePetProps = Omit<UseMutateProps<void, GenericErrorResponse, number>, "path" | "verb">;

export const useDeletePet = ({...props}: UseDeletePetProps) => useMutate<void, GenericErrorResponse, number>("DELETE", `/pets`, props);
'''


def parse(spec: dict) -> OpenAPI:
    return OpenAPI.model_validate(spec)


class TestGenerateSource:
    """Tests for the document to text entry point."""

    def test_petstore(self):
        assert generate_source(parse(PETSTORE_SPEC)) == PETSTORE_OUTPUT

    def test_get_pet_scenario(self):
        output = generate_source(parse(GET_PET_SPEC))

        assert 'export interface Pet {id: number; name?: string}' in output
        assert (
            'export type GetPetProps = Omit<GetProps<Pet, Error>, "path"> & {id: number};'
            in output
        )
        assert 'export const GetPet = ({id, ...props}: GetPetProps) => (' in output
        assert '<Get<Pet, Error>' in output

    def test_is_idempotent(self):
        openapi = parse(PETSTORE_SPEC)
        assert generate_source(openapi) == generate_source(openapi)
        assert generate_source(parse(PETSTORE_SPEC)) == generate_source(openapi)

    def test_minimal_document_is_only_the_header(self):
        output = generate_source(parse(MINIMAL_OPENAPI_SPEC))
        assert output.endswith('Exclude<keyof T, K>>;\n')
        assert 'export interface' not in output

    def test_without_responses(self):
        output = generate_source(parse(PETSTORE_SPEC), include_responses=False)
        assert 'export type GenericErrorResponse' not in output

    def test_request_bodies_are_declared(self):
        spec = copy.deepcopy(PETSTORE_SPEC)
        spec['components']['requestBodies'] = {
            'PetBody': {
                'content': {
                    'application/json': {'schema': {'$ref': '#/components/schemas/NewPet'}}
                }
            }
        }
        spec['paths']['/pets']['post']['requestBody'] = {
            '$ref': '#/components/requestBodies/PetBody'
        }

        output = generate_source(parse(spec))

        assert 'export type PetBodyRequestBody = NewPet;' in output
        assert '<Mutate<Pet, GenericErrorResponse, PetBodyRequestBody>' in output

    def test_polling_and_inline_response(self):
        output = generate_source(parse(PARAMETERS_SPEC))

        assert (
            'export interface GetJobResponse {id?: string; state?: "queued" | "running" | "done"}'
            in output
        )
        assert 'export const GetJob = ({tenantId, jobId, verbose, ...props}: GetJobProps)' in output
        assert 'path={`/tenants/${tenantId}/jobs/${jobId}?${qs.stringify({verbose})}`}' in output
        assert 'export const PollGetJob = ' in output
        assert '/**\n * Get a job (long polling)\n */\nexport const PollGetJob' in output

    def test_optional_path_param(self):
        spec = copy.deepcopy(GET_PET_SPEC)
        spec['paths']['/pets/{id}']['get']['parameters'][0]['required'] = False

        output = generate_source(parse(spec))

        assert (
            'export type GetPetProps = Omit<GetProps<Pet, Error>, "path"> & {id?: number};'
            in output
        )

    def test_polling_variant_of_a_post(self):
        spec = copy.deepcopy(MINIMAL_OPENAPI_SPEC)
        spec['paths'] = {
            '/jobs': {
                'post': {
                    'operationId': 'createJob',
                    'parameters': [
                        {'name': 'Prefer', 'in': 'header', 'schema': {'type': 'string'}}
                    ],
                    'responses': {'202': {'description': 'Accepted'}},
                }
            }
        }

        output = generate_source(parse(spec))

        assert '<Mutate<void, unknown, void>\n    verb="POST"' in output
        assert (
            'export type PollCreateJobProps = Omit<PollProps<void, unknown>, "path">;' in output
        )
        assert '  <Poll<void, unknown>\n    path={`/jobs`}\n' in output

    def test_dashed_parameter_names_are_quoted(self):
        spec = copy.deepcopy(PETSTORE_SPEC)
        spec['paths']['/pets']['get']['parameters'].append(
            {'name': 'x-tag', 'in': 'query', 'schema': {'type': 'string'}}
        )

        output = generate_source(parse(spec))

        assert '"x-tag"?: string}' in output
        assert 'export const ListPets = ({limit, "x-tag": xTag, ...props}: ListPetsProps)' in output
        assert 'path={`/pets?${qs.stringify({limit, "x-tag": xTag})}`}' in output

    def test_nullable_schema(self):
        spec = copy.deepcopy(PETSTORE_SPEC)
        spec['components']['schemas']['NewPet']['nullable'] = True
        spec['components']['schemas']['Pet']['properties']['tag']['nullable'] = True

        output = generate_source(parse(spec))

        assert 'export interface Pet {id: number; name?: string; tag?: string | null}' in output
        assert 'export type NewPet = {name: string; tag?: string} | null;' in output

    def test_document_order_is_kept(self):
        spec = copy.deepcopy(PETSTORE_SPEC)
        spec['paths'] = {
            '/pets/{id}': {
                'parameters': spec['paths']['/pets/{id}']['parameters'],
                'delete': spec['paths']['/pets/{id}']['delete'],
                'get': spec['paths']['/pets/{id}']['get'],
            },
            '/pets': spec['paths']['/pets'],
        }

        output = generate_source(parse(spec))

        positions = [
            output.index(f'export const {name} ')
            for name in ('DeletePet', 'GetPet', 'ListPets', 'CreatePet')
        ]
        assert positions == sorted(positions)

    def test_unsupported_methods_are_skipped(self):
        spec = copy.deepcopy(GET_PET_SPEC)
        spec['paths']['/pets/{id}']['head'] = {'responses': {'200': {'description': 'ok'}}}
        spec['paths']['/pets/{id}']['options'] = {'responses': {'200': {'description': 'ok'}}}

        output = generate_source(parse(spec))

        assert output.count('export const ') == 2
        assert 'export const useGetPet ' in output

    def test_duplicate_operation_id(self):
        with pytest.raises(DuplicateOperationId) as exc_info:
            generate_source(parse(DUPLICATE_OPERATION_ID_SPEC))
        assert exc_info.value.operation_id == 'listPets'
        assert exc_info.value.path == '/animals'

    def test_array_without_items(self):
        spec = copy.deepcopy(GET_PET_SPEC)
        spec['components']['schemas']['Tags'] = {'type': 'array'}

        with pytest.raises(MissingItemsSchema):
            generate_source(parse(spec))

    def test_unsupported_reference(self):
        spec = copy.deepcopy(GET_PET_SPEC)
        spec['components']['schemas']['Pet']['properties']['owner'] = {
            '$ref': '#/definitions/Owner'
        }

        with pytest.raises(UnsupportedReference):
            generate_source(parse(spec))

    def test_unsupported_version(self):
        with pytest.raises(UnsupportedDocumentVersion):
            generate_source(parse({**MINIMAL_OPENAPI_SPEC, 'openapi': '3.1.0'}))

    def test_custom_emitter(self):
        emitter = MagicMock(spec=CodeEmitter)
        emitter.emit.return_value = 'custom'

        assert generate_source(parse(GET_PET_SPEC), emitter) == 'custom'
        declarations, bindings = emitter.emit.call_args.args
        assert [d.name for d in declarations[0]] == ['Pet', 'Error']
        assert [b.name for b in bindings] == ['GetPet']

    def test_swagger_document(self):
        openapi = SchemaLoader().parse(copy.deepcopy(SWAGGER_SPEC))

        output = generate_source(openapi)

        assert 'export interface Pet {name: string; owner?: Owner}' in output
        assert '<Get<Pet[], unknown>' in output
        assert '<Mutate<void, unknown, Pet>' in output
        assert 'export type UploadPhotoProps' in output
        assert '<Mutate<OkResponse, unknown, void>' in output


class TestGenerateBindings:
    """Tests for the per-document operation loop."""

    def test_operation_ids_are_threaded(self):
        openapi = parse(PETSTORE_SPEC)
        factory = EndpointFactory(SchemaResolver(openapi), TypeGenerator())

        bindings = generate_bindings(openapi, factory)

        assert [b.operation_id for b in bindings] == [
            'listPets',
            'createPet',
            'getPet',
            'deletePet',
        ]


class TestCodegen:
    """Tests for the configured generator."""

    def test_generate_writes_output(self, tmp_path):
        source = tmp_path / 'petstore.json'
        source.write_text(json.dumps(PETSTORE_SPEC))
        output = tmp_path / 'src' / 'petstore.tsx'

        written = Codegen(DocumentConfig(source=str(source), output=str(output))).generate()

        assert written == str(output)
        assert output.read_text() == PETSTORE_OUTPUT

    def test_generate_uses_config(self, tmp_path):
        source = tmp_path / 'petstore.json'
        source.write_text(json.dumps(PETSTORE_SPEC))
        config = DocumentConfig(
            source=str(source),
            output=str(tmp_path / 'api.tsx'),
            runtime_module='restful-react-fork',
            include_responses=False,
            hooks=False,
        )

        output = Codegen(config).generate_source()

        assert 'from "restful-react-fork";' in output
        assert 'GenericErrorResponse = Error' not in output
        assert 'useGet' not in output

    def test_no_output_on_failure(self, tmp_path):
        source = tmp_path / 'duplicated.json'
        source.write_text(json.dumps(DUPLICATE_OPERATION_ID_SPEC))
        output = tmp_path / 'api.tsx'

        with pytest.raises(DuplicateOperationId):
            Codegen(DocumentConfig(source=str(source), output=str(output))).generate()
        assert not output.exists()

    def test_custom_loader(self, tmp_path):
        loader = MagicMock(spec=SchemaLoader)
        loader.load.return_value = parse(GET_PET_SPEC)
        config = DocumentConfig(source='https://api.example.com/openapi.json', output='x.tsx')

        codegen = Codegen(config, schema_loader=loader)
        output = codegen.generate_source()

        loader.load.assert_called_once_with('https://api.example.com/openapi.json')
        assert codegen.openapi is not None
        assert 'export const GetPet' in output
