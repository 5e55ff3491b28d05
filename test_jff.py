#!/usr/bin/env python3
"""Pruebas para la generación de archivos JFF de la Máquina de Turing"""
import xml.etree.ElementTree as ET

import pytest
from django.test import Client

client = Client()


@pytest.mark.parametrize("regex", [
    "a*b",
    "(a|b)*",
    "(a|b)*c",
    "a+",
    "a?b",
])
def test_jff_generation(regex):
    print(f"\n{'=' * 60}")
    print(f"Probando regex: {regex}")
    print('=' * 60)

    r = client.get('/api/regex-to-tm/jff/', {'regex': regex})
    print(f"Status: {r.status_code}")
    assert r.status_code == 200
    assert r['Content-Type'].startswith('application/xml')
    assert r['Content-Disposition'].startswith('attachment; filename="tm_')

    root = ET.fromstring(r.content.decode('utf-8'))
    assert root.tag == 'structure'
    assert root.find('type').text == 'turing'

    automaton = root.find('automaton')
    assert automaton is not None

    states = automaton.findall('state')
    state_ids = [state.get('id') for state in states]
    print(f"Estados encontrados: {len(states)}")

    # IDs únicos, numéricos y no negativos
    assert len(state_ids) == len(set(state_ids))
    assert all(int(state_id) >= 0 for state_id in state_ids)

    initial = [s for s in states if s.find('initial') is not None]
    assert [s.get('id') for s in initial] == ['0']

    transitions = automaton.findall('transition')
    print(f"Transiciones encontradas: {len(transitions)}")
    valid_state_ids = set(state_ids)
    for trans in transitions:
        assert trans.find('from').text in valid_state_ids
        assert trans.find('to').text in valid_state_ids
        assert trans.find('move').text in ('L', 'R', 'S')
    print("[OK] Archivo JFF valido!")


def test_jff_filename_is_sanitized():
    r = client.get('/api/regex-to-tm/jff/', {'regex': '(a|b)*c'})
    assert 'filename="tm__a_b__c.jff"' in r['Content-Disposition']


def test_jff_post_body():
    r = client.post('/api/regex-to-tm/jff/', data='{"regex": "ab"}', content_type='application/json')
    assert r.status_code == 200
    root = ET.fromstring(r.content.decode('utf-8'))
    finals = [s.get('name') for s in root.iter('state') if s.find('final') is not None]
    assert finals == ['qAccept']


def test_jff_missing_regex():
    r = client.get('/api/regex-to-tm/jff/')
    assert r.status_code == 400
    assert r.json()['success'] is False
