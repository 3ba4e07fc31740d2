"""
VSAC code system OIDs and their canonical FHIR URIs.

SVS responses identify code systems by OID only; this table lets concepts be
reported with the URI a FHIR-based engine expects.
"""

from typing import Dict, Optional

VSAC_CODE_SYSTEMS: Dict[str, Dict[str, str]] = {
    # Clinical terminologies
    '2.16.840.1.113883.6.96': {'name': 'SNOMEDCT', 'uri': 'http://snomed.info/sct'},
    '2.16.840.1.113883.6.5': {'name': 'SNOMED', 'uri': 'http://snomed.info/sct'},
    '2.16.840.1.113883.6.1': {'name': 'LOINC', 'uri': 'http://loinc.org'},
    '2.16.840.1.113883.6.88': {'name': 'RXNORM', 'uri': 'http://www.nlm.nih.gov/research/umls/rxnorm'},
    '2.16.840.1.113883.6.90': {'name': 'ICD10CM', 'uri': 'http://hl7.org/fhir/sid/icd-10-cm'},
    '2.16.840.1.113883.6.4': {'name': 'ICD10PCS', 'uri': 'http://www.cms.gov/Medicare/Coding/ICD10'},
    '2.16.840.1.113883.6.3': {'name': 'ICD10', 'uri': 'http://hl7.org/fhir/sid/icd-10'},
    '2.16.840.1.113883.6.103': {'name': 'ICD9CM', 'uri': 'http://hl7.org/fhir/sid/icd-9-cm'},
    '2.16.840.1.113883.6.104': {
        'name': 'ICD9PCS',
        'uri': 'http://www.cms.gov/Medicare/Coding/ICD9ProviderDiagnosticCodes/codes.html'
    },
    '2.16.840.1.113883.6.2': {'name': 'ICD9', 'uri': 'http://hl7.org/fhir/sid/icd-9'},
    '2.16.840.1.113883.6.43.1': {'name': 'ICD-O-3', 'uri': 'http://terminology.hl7.org/CodeSystem/icd-o-3'},
    '2.16.840.1.113883.6.12': {'name': 'CPT', 'uri': 'http://www.ama-assn.org/go/cpt'},
    '2.16.840.1.113883.6.285': {'name': 'HCPCS', 'uri': 'http://www.cms.gov/Medicare/Coding/HCPCSReleaseCodeSets'},
    '2.16.840.1.113883.6.13': {'name': 'CDT', 'uri': 'http://ada.org/cdt'},
    '2.16.840.1.113883.12.292': {'name': 'CVX', 'uri': 'http://hl7.org/fhir/sid/cvx'},
    '2.16.840.1.113883.12.227': {'name': 'MVX', 'uri': 'http://hl7.org/fhir/sid/mvx'},
    '2.16.840.1.113883.6.69': {'name': 'NDC', 'uri': 'http://hl7.org/fhir/sid/ndc'},
    '2.16.840.1.113883.4.9': {'name': 'UNII', 'uri': 'http://fdasis.nlm.nih.gov'},
    '2.16.840.1.113883.3.26.1.1': {'name': 'NCI', 'uri': 'http://ncimeta.nci.nih.gov'},
    '2.16.840.1.113883.3.26.1.5': {'name': 'NDFRT', 'uri': 'http://hl7.org/fhir/ndfrt'},
    '2.16.840.1.113883.6.345': {'name': 'MED-RT', 'uri': 'http://va.gov/terminologies/medrt'},
    '2.16.840.1.113883.6.86': {'name': 'UMLS', 'uri': 'http://www.nlm.nih.gov/research/umls'},
    '2.16.840.1.113883.6.177': {'name': 'MSH', 'uri': 'http://www.nlm.nih.gov/mesh'},
    '2.16.840.1.113883.6.256': {'name': 'RadLex', 'uri': 'http://radlex.org'},
    '1.2.840.10008.2.16.4': {'name': 'DCM', 'uri': 'http://dicom.nema.org/resources/ontology/DCM'},
    '2.16.840.1.113883.6.24': {'name': 'MDC', 'uri': 'urn:iso:std:iso:11073:10101'},
    '2.16.840.1.113883.6.8': {'name': 'UCUM', 'uri': 'http://unitsofmeasure.org'},

    # Administrative and demographic
    '2.16.840.1.113883.6.238': {'name': 'CDCREC', 'uri': 'urn:oid:2.16.840.1.113883.6.238'},
    '2.16.840.1.113883.6.259': {
        'name': 'HSLOC',
        'uri': 'https://www.cdc.gov/nhsn/cdaportal/terminology/codesystem/hsloc.html'
    },
    '2.16.840.1.113883.6.101': {'name': 'NUCCPT', 'uri': 'http://nucc.org/provider-taxonomy'},
    '2.16.840.1.113883.3.221.5': {'name': 'SOP', 'uri': 'https://nahdo.org/sopt'},
    '2.16.840.1.113883.6.301.1': {'name': 'UBTOB', 'uri': 'https://www.nubc.org/CodeSystem/TypeOfBill'},
    '2.16.840.1.113883.6.301.3': {'name': 'UBREV', 'uri': 'https://www.nubc.org/CodeSystem/RevenueCodes'},
    '2.16.840.1.113883.6.301.5': {'name': 'UBDISP', 'uri': 'https://www.nubc.org/CodeSystem/PatDischargeStatus'},
    '2.16.840.1.113883.6.121': {'name': 'BCP47', 'uri': 'urn:ietf:bcp:47'},
    '1.0.3166.1.2.2': {'name': 'ISO3166', 'uri': 'urn:iso:std:iso:3166'},

    # HL7 v2 tables
    '2.16.840.1.113883.18.2': {'name': 'AdministrativeSex', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0001'},
    '2.16.840.1.113883.12.1': {'name': 'HL7Table0001', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0001'},
    '2.16.840.1.113883.12.4': {'name': 'HL7Table0004', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0004'},
    '2.16.840.1.113883.12.7': {'name': 'HL7Table0007', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0007'},
    '2.16.840.1.113883.12.23': {'name': 'HL7Table0023', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0023'},
    '2.16.840.1.113883.12.63': {'name': 'HL7Table0063', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0063'},
    '2.16.840.1.113883.12.112': {
        'name': 'DischargeDisposition',
        'uri': 'http://terminology.hl7.org/CodeSystem/v2-0112'
    },
    '2.16.840.1.113883.12.162': {'name': 'HL7Table0162', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0162'},
    '2.16.840.1.113883.12.163': {'name': 'HL7Table0163', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0163'},
    '2.16.840.1.113883.12.203': {'name': 'HL7Table0203', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0203'},
    '2.16.840.1.113883.12.487': {'name': 'HL7Table0487', 'uri': 'http://terminology.hl7.org/CodeSystem/v2-0487'},

    # HL7 v3 vocabularies
    '2.16.840.1.113883.5.1': {
        'name': 'AdministrativeGender',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-AdministrativeGender'
    },
    '2.16.840.1.113883.5.2': {'name': 'MaritalStatus', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-MaritalStatus'},
    '2.16.840.1.113883.5.4': {'name': 'ActCode', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActCode'},
    '2.16.840.1.113883.5.6': {'name': 'ActClass', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActClass'},
    '2.16.840.1.113883.5.7': {'name': 'ActPriority', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActPriority'},
    '2.16.840.1.113883.5.8': {'name': 'ActReason', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActReason'},
    '2.16.840.1.113883.5.14': {'name': 'ActStatus', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActStatus'},
    '2.16.840.1.113883.5.25': {
        'name': 'Confidentiality',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-Confidentiality'
    },
    '2.16.840.1.113883.5.41': {'name': 'EntityClass', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-EntityClass'},
    '2.16.840.1.113883.5.43': {
        'name': 'EntityNamePartQualifier',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-EntityNamePartQualifier'
    },
    '2.16.840.1.113883.5.45': {'name': 'EntityNameUse', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-EntityNameUse'},
    '2.16.840.1.113883.5.50': {'name': 'Ethnicity', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-Ethnicity'},
    '2.16.840.1.113883.5.60': {
        'name': 'LanguageAbilityMode',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-LanguageAbilityMode'
    },
    '2.16.840.1.113883.5.61': {
        'name': 'LanguageAbilityProficiency',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-LanguageAbilityProficiency'
    },
    '2.16.840.1.113883.5.63': {
        'name': 'LivingArrangement',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-LivingArrangement'
    },
    '2.16.840.1.113883.5.79': {'name': 'mediaType', 'uri': 'urn:ietf:bcp:13'},
    '2.16.840.1.113883.5.83': {
        'name': 'ObservationInterpretation',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ObservationInterpretation'
    },
    '2.16.840.1.113883.5.84': {
        'name': 'ObservationMethod',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ObservationMethod'
    },
    '2.16.840.1.113883.5.88': {
        'name': 'ParticipationFunction',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ParticipationFunction'
    },
    '2.16.840.1.113883.5.90': {
        'name': 'ParticipationType',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ParticipationType'
    },
    '2.16.840.1.113883.5.104': {'name': 'Race', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-Race'},
    '2.16.840.1.113883.5.110': {'name': 'RoleClass', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-RoleClass'},
    '2.16.840.1.113883.5.111': {'name': 'RoleCode', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-RoleCode'},
    '2.16.840.1.113883.5.112': {
        'name': 'RouteOfAdministration',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-RouteOfAdministration'
    },
    '2.16.840.1.113883.5.1001': {'name': 'ActMood', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActMood'},
    '2.16.840.1.113883.5.1002': {
        'name': 'ActRelationshipType',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActRelationshipType'
    },
    '2.16.840.1.113883.5.1008': {'name': 'NullFlavor', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-NullFlavor'},
    '2.16.840.1.113883.5.1052': {'name': 'ActSite', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-ActSite'},
    '2.16.840.1.113883.5.1063': {
        'name': 'ObservationValue',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ObservationValue'
    },
    '2.16.840.1.113883.5.1064': {
        'name': 'ParticipationMode',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ParticipationMode'
    },
    '2.16.840.1.113883.5.1068': {'name': 'RoleStatus', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-RoleStatus'},
    '2.16.840.1.113883.5.1070': {
        'name': 'SubstanceAdminSubstitution',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-substanceAdminSubstitution'
    },
    '2.16.840.1.113883.5.1076': {
        'name': 'ReligiousAffiliation',
        'uri': 'http://terminology.hl7.org/CodeSystem/v3-ReligiousAffiliation'
    },
    '2.16.840.1.113883.5.1077': {'name': 'EducationLevel', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-EducationLevel'},
    '2.16.840.1.113883.5.1119': {'name': 'AddressUse', 'uri': 'http://terminology.hl7.org/CodeSystem/v3-AddressUse'},
}


def get_vsac_code_system(system: Optional[str]) -> Optional[str]:
    """Return the URI for a VSAC code system OID, or None if the OID is not in the table."""
    entry = VSAC_CODE_SYSTEMS.get(system) if system is not None else None
    if entry is None or 'uri' not in entry:
        return None
    return entry['uri']
