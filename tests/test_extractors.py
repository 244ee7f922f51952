import unittest

from djeautomation.models import PublicationType, Urgency
from djeautomation.offline.extractors import (
    MAX_PARTIES,
    RegistrationRef,
    classify_type,
    classify_urgency,
    extract_lawyers,
    extract_parties,
    extract_process_number,
    extract_registration_refs,
)


class ProcessNumberTests(unittest.TestCase):
    def test_returns_embedded_identifier(self) -> None:
        text = "Processo nº 1234567-89.2024.8.26.0001, em trâmite perante a 1ª Vara Cível."
        self.assertEqual(extract_process_number(text), "1234567-89.2024.8.26.0001")

    def test_returns_first_match(self) -> None:
        text = "Autos 0000001-11.2023.8.26.0100 apensos ao 7654321-00.2022.8.26.0002"
        self.assertEqual(extract_process_number(text), "0000001-11.2023.8.26.0100")

    def test_ignores_longer_digit_runs(self) -> None:
        self.assertIsNone(extract_process_number("11234567-89.2024.8.26.0001"))

    def test_none_without_match(self) -> None:
        self.assertIsNone(extract_process_number("Sem número de processo"))
        self.assertIsNone(extract_process_number(""))


class RegistrationRefTests(unittest.TestCase):
    def test_collects_prefix_orderings(self) -> None:
        text = "ADV: MARIA SOUZA (OAB 123456/SP), JOSE LIMA (OAB/RJ 98.765)"
        self.assertEqual(
            extract_registration_refs(text),
            [RegistrationRef("123456", "SP"), RegistrationRef("98765", "RJ")],
        )

    def test_number_sign_and_dash(self) -> None:
        self.assertEqual(extract_registration_refs("Dra. Ana, OAB nº 123.456-SP"), [RegistrationRef("123456", "SP")])

    def test_bare_number_state_pair(self) -> None:
        self.assertEqual(extract_registration_refs("Advogado 45678/MG"), [RegistrationRef("45678", "MG")])

    def test_deduplicates_by_state_and_number(self) -> None:
        text = "OAB/SP 123456 ... OAB 123456/SP ... OAB/PR 123456"
        self.assertEqual(
            extract_registration_refs(text),
            [RegistrationRef("123456", "SP"), RegistrationRef("123456", "PR")],
        )

    def test_rejects_short_numbers_and_unknown_states(self) -> None:
        self.assertEqual(extract_registration_refs("OAB/SP 123"), [])
        self.assertEqual(extract_registration_refs("OAB/XX 123456"), [])
        self.assertEqual(extract_registration_refs(""), [])


class PartyAndLawyerTests(unittest.TestCase):
    def test_extracts_labelled_parties(self) -> None:
        text = "Reqte: Maria Aparecida Souza - Reqdo: Banco Exemplo Ltda - Vistos."
        self.assertEqual(extract_parties(text), ["Maria Aparecida Souza", "Banco Exemplo Ltda"])

    def test_full_labels_and_accents(self) -> None:
        text = "Apelante: João Pereira; Apelada: Companhia de Seguros Alfa; Réu: Carlos Dias\n"
        self.assertEqual(
            extract_parties(text),
            ["João Pereira", "Companhia de Seguros Alfa", "Carlos Dias"],
        )

    def test_parties_capped(self) -> None:
        text = " ".join(f"Autor: Fulano {chr(65 + i)} Silva;" for i in range(12))
        parties = extract_parties(text)
        self.assertEqual(len(parties), MAX_PARTIES)
        self.assertEqual(parties[0], "Fulano A Silva")

    def test_lawyers_listed_with_oab(self) -> None:
        text = "Vistos. - ADV: MARIA SOUZA (OAB 123456/SP), JOSÉ LIMA (OAB 54321/SP)"
        self.assertEqual(extract_lawyers(text), ["MARIA SOUZA", "JOSÉ LIMA"])


class ClassifyTypeTests(unittest.TestCase):
    def test_judgment_wins_over_notice(self) -> None:
        text = "Fica a parte intimada da SENTENÇA proferida nos autos."
        self.assertEqual(classify_type(text), PublicationType.SENTENCA)

    def test_each_type(self) -> None:
        cases = {
            "Decisão interlocutória: defiro a tutela.": PublicationType.DECISAO,
            "Despacho: manifeste-se a parte autora.": PublicationType.DESPACHO,
            "Cite-se o requerido para contestar.": PublicationType.CITACAO,
            "Intimem-se as partes.": PublicationType.INTIMACAO,
            "ACÓRDÃO - negaram provimento ao recurso.": PublicationType.ACORDAO,
            "EDITAL de leilão do imóvel.": PublicationType.EDITAL,
            "Certidão de publicação.": PublicationType.OUTROS,
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(classify_type(text), expected)

    def test_summons_outranks_edict(self) -> None:
        self.assertEqual(classify_type("EDITAL DE CITAÇÃO de réu em local incerto"), PublicationType.CITACAO)


class ClassifyUrgencyTests(unittest.TestCase):
    def test_urgent_keyword_outranks_long_deadline(self) -> None:
        text = "URGENTE. Manifeste-se no prazo de 15 dias."
        self.assertEqual(classify_urgency(text), Urgency.CRITICAL)

    def test_deadline_thresholds(self) -> None:
        self.assertEqual(classify_urgency("Cumpra-se no prazo de 2 dias."), Urgency.CRITICAL)
        self.assertEqual(classify_urgency("Manifeste-se no prazo de 5 (cinco) dias."), Urgency.HIGH)
        self.assertEqual(classify_urgency("Recolha as custas no prazo de 48 horas."), Urgency.CRITICAL)
        self.assertEqual(classify_urgency("Manifeste-se no prazo de 15 dias."), Urgency.NORMAL)

    def test_shortest_deadline_counts(self) -> None:
        text = "Prazo de 15 dias para contestar e prazo de 3 dias para emendar."
        self.assertEqual(classify_urgency(text), Urgency.HIGH)

    def test_summons_is_high(self) -> None:
        self.assertEqual(classify_urgency("Expeça-se mandado de penhora."), Urgency.HIGH)
        self.assertEqual(classify_urgency("Cite-se o réu para contestar em prazo de 15 dias."), Urgency.HIGH)

    def test_defaults_to_normal(self) -> None:
        self.assertEqual(classify_urgency("Vistos. Aguarde-se."), Urgency.NORMAL)
        self.assertEqual(classify_urgency(""), Urgency.NORMAL)


if __name__ == "__main__":
    unittest.main()
