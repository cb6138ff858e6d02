"""Initialize the default chart of accounts, journals and fiscal year."""

from datetime import date

import click
from compta.domain.account import AccountService
from compta.domain.entities import JournalType
from compta.domain.fiscal_year import FiscalYearService
from compta.domain.journal import JournalService


# Extract of the SYSCOHADA chart: (number, label, is_letterable)
DEFAULT_CHART = [
    # Class 1: long-term resources
    ("1010", "Capital social", False),
    ("1310", "Subventions d'équipement", False),
    # Class 2: fixed assets
    ("2110", "Frais de recherche et de développement", False),
    ("2411", "Matériel et outillage industriel et commercial", False),
    ("2441", "Matériel de transport", False),
    ("2812", "Amortissements des brevets, licences, logiciels", False),
    # Class 3: inventories
    ("3110", "Marchandises", False),
    ("3810", "Stocks en voie d'acheminement", False),
    # Class 4: third parties
    ("4011", "Fournisseurs", True),
    ("4081", "Fournisseurs - Factures non parvenues", True),
    ("4111", "Clients", True),
    ("4181", "Clients - Factures à établir", True),
    ("4451", "État, TVA facturée", False),
    ("4452", "État, TVA récupérable sur immobilisations", False),
    ("4456", "État, TVA récupérable sur achats et services", False),
    ("4457", "État, Crédit de TVA à reporter", False),
    # Class 5: treasury
    ("5210", "Banques locales", False),
    ("5310", "Chèques postaux", False),
    ("5541", "Orange Money", False),
    ("5542", "Wave", False),
    ("5710", "Caisse Siège", False),
    ("5850", "Virements de fonds", False),
    # Class 6: expenses
    ("6011", "Achats de marchandises", False),
    ("6031", "Variations des stocks de marchandises (débit)", False),
    ("6120", "Redevances de crédit-bail et contrats assimilés", False),
    ("6220", "Locations et charges locatives", False),
    ("6270", "Frais de télécommunications", False),
    ("6311", "Salaires et appointements", False),
    ("6350", "Cotisations sociales", False),
    ("6400", "Impôts et taxes", False),
    ("6910", "Dotations aux amortissements d'exploitation", False),
    # Class 7: revenue
    ("7011", "Ventes de marchandises", False),
    ("7031", "Variations des stocks de marchandises (crédit)", False),
    ("7061", "Prestations de services", False),
]

# (code, label, type, counterpart account)
DEFAULT_JOURNALS = [
    ("AC", "Journal des Achats", JournalType.ACHAT, None),
    ("VE", "Journal des Ventes", JournalType.VENTE, None),
    ("BQ", "Journal de Banque", JournalType.TRESORERIE, "5210"),
    ("CA", "Journal de Caisse", JournalType.TRESORERIE, "5710"),
    ("OD", "Journal des Opérations Diverses", JournalType.OPERATIONS_DIVERSES, None),
]


@click.command("init-chart")
@click.option("--no-fiscal-year", is_flag=True, help="Do not open the current fiscal year")
@click.pass_context
def init_chart(ctx, no_fiscal_year: bool):
    """Load the default chart of accounts and journals.

    Existing accounts and journals are left untouched, so the command can be
    run again safely.
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    journal_service = JournalService(db)
    fiscal_year_service = FiscalYearService(db)

    created_accounts = account_service.load_chart(DEFAULT_CHART)
    click.echo(f"Created {created_accounts} account(s)")

    created_journals = 0
    for code, label, journal_type, counterpart in DEFAULT_JOURNALS:
        if journal_service.get_journal(code) is not None:
            continue
        try:
            journal_service.create_journal(code, label, journal_type, counterpart)
            created_journals += 1
        except ValueError as e:
            click.echo(f"Error creating journal '{code}': {e}", err=True)
    click.echo(f"Created {created_journals} journal(s)")

    if not no_fiscal_year:
        year = date.today().year
        if fiscal_year_service.get_fiscal_year(year) is None:
            try:
                fiscal_year_service.create_fiscal_year(year)
                click.echo(f"Opened fiscal year {year}")
            except ValueError as e:
                click.echo(f"Error opening fiscal year {year}: {e}", err=True)


def register_commands(cli):
    """Register init-chart command with main CLI."""
    cli.add_command(init_chart)
